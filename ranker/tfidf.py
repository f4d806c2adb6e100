"""
Corpus Weighting (TF-IDF)
-------------------------

Weights every term of a document relative to one ranking corpus
(the job description plus all candidate resumes).

    tf(t, d)  = count(t in d) / len(d)
    idf(t)    = ln(N / (df(t) + 1))        N = corpus size
    w(t, d)   = tf(t, d) * idf(t)

The "+1" keeps idf finite for tiny corpora. It also makes idf negative once
a term shows up in more than N/e documents, so terms every resume shares
pull similarity down instead of up.

Two flavours live here:
- plain functions on token lists (weigh, inverse_document_frequency, ...)
  that return dict vectors, handy for one-off checks and tests
- CorpusWeighting, the vectorized version the ranking pipeline uses. It counts
  terms with scikit-learn's CountVectorizer and keeps the weights as a sparse
  matrix, one row per corpus document.

Weights are only meaningful inside the corpus they were computed for, so
nothing here is cached between runs.
"""

import math
from collections import Counter
from typing import Dict, List, Sequence

import numpy as np
import scipy.sparse as sp
from sklearn.feature_extraction.text import CountVectorizer

Tokens = Sequence[str]


def term_frequencies(tokens: Tokens) -> Dict[str, float]:
    """Fraction of the document each distinct token accounts for."""
    if not tokens:
        return {}
    total = len(tokens)
    return {token: count / total for token, count in Counter(tokens).items()}


def document_frequency(token: str, corpus_tokens: Sequence[Tokens]) -> int:
    return sum(1 for doc in corpus_tokens if token in doc)


def inverse_document_frequency(token: str, corpus_tokens: Sequence[Tokens]) -> float:
    df = document_frequency(token, corpus_tokens)
    return math.log(len(corpus_tokens) / (df + 1))


def weigh(tokens: Tokens, corpus_tokens: Sequence[Tokens]) -> Dict[str, float]:
    """
    TF-IDF vector for one document against its corpus.

    Only tokens present in the document get an entry. A document without
    tokens gives an empty (zero) vector.
    """
    # set lookups instead of list scans when counting documents
    corpus_sets = [set(doc) for doc in corpus_tokens]
    return {
        token: tf * inverse_document_frequency(token, corpus_sets)
        for token, tf in term_frequencies(tokens).items()
    }


def _as_tokens(tokens):
    # CountVectorizer hands every "document" to the analyzer; ours are
    # already token lists, so pass them through untouched.
    return tokens


class CorpusWeighting:
    """
    TF-IDF weights for a whole corpus at once.

    Row i of every matrix here belongs to corpus_tokens[i]. Build one per
    ranking run and throw it away afterwards.
    """

    def __init__(self, corpus_tokens: Sequence[Tokens]):
        if not corpus_tokens:
            raise ValueError("corpus must contain at least one document")
        self.corpus_tokens: List[List[str]] = [list(doc) for doc in corpus_tokens]
        self.n_documents = len(self.corpus_tokens)

        # Step 1: raw counts (documents x vocabulary)
        if any(self.corpus_tokens):
            self.vectorizer = CountVectorizer(analyzer=_as_tokens, lowercase=False)
            self.counts = self.vectorizer.fit_transform(self.corpus_tokens).tocsr()
            self.vocabulary = self.vectorizer.get_feature_names_out()
        else:
            # CountVectorizer refuses an empty vocabulary; every vector is zero
            self.vectorizer = None
            self.counts = sp.csr_matrix((self.n_documents, 0), dtype=np.int64)
            self.vocabulary = np.array([], dtype=object)

        # Step 2: document frequency and idf per vocabulary term
        self.doc_lengths = np.asarray(self.counts.sum(axis=1)).ravel()
        self.document_frequency = np.asarray((self.counts > 0).sum(axis=0)).ravel()
        self.idf = np.log(self.n_documents / (self.document_frequency + 1.0))

        # Step 3: tf = counts / document length (empty documents stay zero)
        inv_lengths = np.divide(
            1.0,
            self.doc_lengths,
            out=np.zeros(self.n_documents, dtype=float),
            where=self.doc_lengths > 0,
        )
        self.tf = (sp.diags(inv_lengths) @ self.counts).tocsr()

        # Step 4: tf * idf
        if self.idf.size:
            self._weights = (self.tf @ sp.diags(self.idf)).tocsr()
        else:
            self._weights = sp.csr_matrix(self.tf.shape, dtype=float)

    def weights(self) -> sp.csr_matrix:
        """Sparse TF-IDF matrix, one row per corpus document."""
        return self._weights

    def vector(self, index: int) -> Dict[str, float]:
        """Row `index` as a {token: weight} dict, same values as weigh()."""
        row = self.counts[index]
        weights = self._weights[index]
        return {
            str(self.vocabulary[col]): float(weights[0, col])
            for col in row.indices
        }
