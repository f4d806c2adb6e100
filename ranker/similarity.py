import math
from collections import Counter
from typing import Mapping, Sequence

DEFAULT_TOP_N = 10


def cosine_similarity_score(vec_a: Mapping[str, float], vec_b: Mapping[str, float]) -> float:
    """
    Cosine similarity of two sparse {token: weight} vectors, in [0, 1].
    A zero vector on either side scores 0 instead of dividing by zero.
    """
    dot = 0.0
    mag_a = 0.0
    mag_b = 0.0
    for key in set(vec_a) | set(vec_b):
        a = vec_a.get(key, 0.0)
        b = vec_b.get(key, 0.0)
        dot += a * b
        mag_a += a * a
        mag_b += b * b

    if mag_a == 0 or mag_b == 0:
        return 0.0
    similarity = dot / (math.sqrt(mag_a) * math.sqrt(mag_b))
    # float drift can land just outside the range
    return min(1.0, max(0.0, similarity))


def to_percentage(similarity: float) -> float:
    """0.61234 -> 61.23"""
    return round(float(similarity) * 100, 2)


def matched_terms(tokens_a: Sequence[str], tokens_b: Sequence[str], top_n: int = DEFAULT_TOP_N) -> list[str]:
    """
    Shared tokens, most frequent first (count in a + count in b).
    Equal counts are ordered alphabetically so results are reproducible.
    """
    if top_n <= 0:
        return []
    counts_a = Counter(tokens_a)
    counts_b = Counter(tokens_b)
    shared = counts_a.keys() & counts_b.keys()
    ranked = sorted(shared, key=lambda t: (-(counts_a[t] + counts_b[t]), t))
    return ranked[:top_n]
