"""
Ranking Pipeline
----------------

Ranks candidate resumes against one job description.

    tokenize query + candidates  ->  TF-IDF over the whole corpus
    ->  cosine score of each candidate vs. the query  ->  sort + rank

The corpus is {query} + candidates and is rebuilt on every call. Bad input
(empty query, no candidates, an empty resume, duplicate ids) fails the whole
run with InvalidInput; we never return a ranking with someone silently
missing from it.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity

from ranker.config import settings
from ranker.metadata import extract_job_metadata
from ranker.preprocess import tokenize
from ranker.similarity import matched_terms, to_percentage
from ranker.tfidf import CorpusWeighting

logger = logging.getLogger(__name__)

Candidate = Union[Tuple[str, str], Mapping[str, Any]]


class InvalidInput(ValueError):
    """A ranking run was handed something it cannot rank."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class SimilarityResult:
    candidate_id: str
    score: float
    matched_terms: List[str] = field(default_factory=list)
    rank: int = 0

    def to_dict(self) -> dict:
        return {
            "candidate_id": self.candidate_id,
            "score": self.score,
            "matched_terms": list(self.matched_terms),
            "rank": self.rank,
        }


def _normalize_candidates(candidates: Iterable[Candidate]) -> List[Tuple[str, str]]:
    """Accept (id, text) pairs or {"id": ..., "text": ...} dicts."""
    out = []
    for i, cand in enumerate(candidates):
        if isinstance(cand, Mapping):
            cid, text = cand.get("id"), cand.get("text")
        else:
            try:
                cid, text = cand
            except (TypeError, ValueError):
                raise InvalidInput(f"candidate #{i} must be an (id, text) pair") from None
        if cid is None or str(cid) == "":
            raise InvalidInput(f"candidate #{i} has no id")
        if not isinstance(text, str):
            raise InvalidInput(f"candidate {cid!r} text must be a string")
        if not text.strip():
            raise InvalidInput(f"candidate {cid!r} has empty text")
        out.append((str(cid), text))
    return out


def validate(query_text: str, candidates: Iterable[Candidate]) -> List[Tuple[str, str]]:
    if not isinstance(query_text, str) or not query_text.strip():
        raise InvalidInput("query text is empty")
    if candidates is None:
        raise InvalidInput("candidate list is empty")
    pairs = _normalize_candidates(candidates)
    if not pairs:
        raise InvalidInput("candidate list is empty")

    seen = set()
    for cid, _ in pairs:
        if cid in seen:
            raise InvalidInput(f"duplicate candidate id {cid!r}")
        seen.add(cid)
    return pairs


def rank_candidates(
    query_text: str,
    candidates: Sequence[Candidate],
    top_n: Optional[int] = None,
) -> List[SimilarityResult]:
    """
    Score every candidate against the query and return them best first.

    Args:
        query_text: job description (optionally with its requirements excerpt)
        candidates: (id, text) pairs or {"id", "text"} dicts, at least one
        top_n: how many matched terms to keep per candidate
               (defaults to RANKER_TOP_N, 10 unless configured)

    Returns:
        SimilarityResult list sorted by score, ranks 1..N. Equal scores keep
        the order the candidates were submitted in.

    Raises:
        InvalidInput: empty query, no candidates, empty candidate text or
        duplicate candidate ids.
    """
    pairs = validate(query_text, candidates)
    if top_n is None:
        top_n = settings.top_n
    logger.info("Ranking %d candidates (top_n=%d)", len(pairs), top_n)

    # Step 1: tokenize everything once
    query_tokens = tokenize(query_text)
    candidate_tokens = [tokenize(text) for _, text in pairs]
    corpus = [query_tokens] + candidate_tokens
    logger.debug(
        "Corpus: %d documents, query has %d tokens", len(corpus), len(query_tokens)
    )

    # Step 2: TF-IDF over {query} + candidates (row 0 is the query)
    weighting = CorpusWeighting(corpus)
    matrix = weighting.weights()
    logger.debug("Vocabulary size: %d", len(weighting.vocabulary))

    # Step 3: cosine similarity of every candidate row vs. the query row.
    # Zero rows (no usable tokens) come out as 0. sklearn rejects a matrix
    # with no columns at all, which happens when nothing in the corpus tokenizes.
    if matrix.shape[1] == 0:
        sims = np.zeros(len(pairs))
    else:
        sims = cosine_similarity(matrix[1:], matrix[0:1]).ravel()

    scored = []
    for (cid, _), tokens, sim in zip(pairs, candidate_tokens, sims):
        sim = min(1.0, max(0.0, float(sim)))
        scored.append((cid, to_percentage(sim), matched_terms(query_tokens, tokens, top_n)))

    # Step 4: stable sort, best first
    scored.sort(key=lambda item: item[1], reverse=True)

    results = [
        SimilarityResult(candidate_id=cid, score=score, matched_terms=terms, rank=i)
        for i, (cid, score, terms) in enumerate(scored, start=1)
    ]
    if results:
        logger.info(
            "Top candidate %s scored %.2f", results[0].candidate_id, results[0].score
        )
    return results


def rank_job(
    description: str,
    candidates: Sequence[Candidate],
    top_n: Optional[int] = None,
) -> List[SimilarityResult]:
    """
    Rank candidates against a raw job description.

    The requirements excerpt is appended to the description before ranking.
    It adds no new words, it just counts the requirement terms twice.
    """
    if not isinstance(description, str) or not description.strip():
        raise InvalidInput("query text is empty")
    job = extract_job_metadata(description)
    return rank_candidates(job.query_text, candidates, top_n=top_n)
