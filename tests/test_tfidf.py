"""
Unit tests for the TF-IDF corpus weighting
------------------------------------------

The dict functions and CorpusWeighting have to agree; the pipeline uses the
matrix version, so most checks compare the two.
"""

import math

import pytest

from ranker import tfidf
from ranker.preprocess import tokenize


@pytest.fixture
def corpus():
    return [
        tokenize("python developer flask sql python"),
        tokenize("backend developer flask sql"),
        tokenize("registered nurse patient care"),
        tokenize("python data scientist pandas"),
    ]


def test_term_frequencies_are_fractions():
    tf = tfidf.term_frequencies(["python", "sql", "python", "flask"])
    assert tf == {"python": 0.5, "sql": 0.25, "flask": 0.25}
    assert tfidf.term_frequencies([]) == {}


def test_document_frequency_counts_documents_not_occurrences(corpus):
    assert tfidf.document_frequency("python", corpus) == 2
    assert tfidf.document_frequency("nurse", corpus) == 1
    assert tfidf.document_frequency("golang", corpus) == 0


def test_idf_formula(corpus):
    # ln(N / (df + 1)) with N = 4
    assert tfidf.inverse_document_frequency("nurse", corpus) == pytest.approx(math.log(4 / 2))
    assert tfidf.inverse_document_frequency("python", corpus) == pytest.approx(math.log(4 / 3))


def test_idf_goes_negative_for_ubiquitous_terms():
    docs = [["shared", "a%d" % i] for i in range(3)]
    # ln(3 / 4) < 0
    assert tfidf.inverse_document_frequency("shared", docs) < 0


def test_idf_non_increasing_in_document_frequency():
    n = 6
    previous = None
    for df in range(0, n + 1):
        docs = [["term"] if i < df else ["other"] for i in range(n)]
        value = tfidf.inverse_document_frequency("term", docs)
        if previous is not None:
            assert value <= previous
        previous = value


def test_weigh_is_sparse_and_uses_tf_times_idf(corpus):
    vec = tfidf.weigh(corpus[0], corpus)

    assert set(vec) == set(corpus[0])
    assert "nurse" not in vec
    expected = (2 / 5) * math.log(4 / 3)
    assert vec["python"] == pytest.approx(expected)


def test_weigh_empty_document(corpus):
    assert tfidf.weigh([], corpus + [[]]) == {}


def test_corpus_weighting_matches_dict_version(corpus):
    weighting = tfidf.CorpusWeighting(corpus)

    for i, doc in enumerate(corpus):
        expected = tfidf.weigh(doc, corpus)
        got = weighting.vector(i)
        assert set(got) == set(expected)
        for token, weight in expected.items():
            assert got[token] == pytest.approx(weight)


def test_corpus_weighting_shapes(corpus):
    weighting = tfidf.CorpusWeighting(corpus)
    matrix = weighting.weights()

    vocab = {t for doc in corpus for t in doc}
    assert matrix.shape == (len(corpus), len(vocab))
    assert list(weighting.doc_lengths) == [len(doc) for doc in corpus]


def test_corpus_weighting_handles_empty_documents():
    weighting = tfidf.CorpusWeighting([["python", "sql"], []])
    assert weighting.vector(1) == {}
    assert weighting.weights()[1].nnz == 0


def test_corpus_weighting_all_empty():
    weighting = tfidf.CorpusWeighting([[], []])
    assert weighting.weights().shape == (2, 0)
    assert weighting.vector(0) == {}


def test_corpus_weighting_requires_documents():
    with pytest.raises(ValueError):
        tfidf.CorpusWeighting([])


def test_corpus_weighting_all_empty_vectors_are_zero():
    weighting = tfidf.CorpusWeighting([[], [], []])
    assert weighting.weights().nnz == 0
    assert [weighting.vector(i) for i in range(3)] == [{}, {}, {}]
