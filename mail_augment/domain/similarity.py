# mail_augment/domain/similarity.py
from typing import List, Optional, Sequence, Tuple

import numpy as np
import structlog

from mail_augment.domain.models import RankedCandidate

log = structlog.get_logger(__name__)

class DimensionMismatchError(ValueError):
    """Raised when two vectors of different length are compared."""
    def __init__(self, len_a: int, len_b: int):
        super().__init__(f"Vectors must have same length: {len_a} vs {len_b}")
        self.len_a = len_a
        self.len_b = len_b

def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """
    Cosine similarity between two vectors.

    Returns a value in [-1, 1] (up to float rounding). A zero-norm vector has
    no direction, so its similarity to anything is 0.0.

    Raises:
        DimensionMismatchError: If the vectors differ in length.
    """
    a = np.asarray(vec_a, dtype=np.float64)
    b = np.asarray(vec_b, dtype=np.float64)
    if a.shape != b.shape:
        log.warning("Vector dimension mismatch", len_a=a.size, len_b=b.size)
        raise DimensionMismatchError(a.size, b.size)

    dot_product = float(np.dot(a, b))
    norm_a = float(np.dot(a, a))
    norm_b = float(np.dot(b, b))

    if norm_a == 0.0 or norm_b == 0.0:
        log.debug("Zero-norm vector detected in cosine similarity")
        return 0.0

    return float(dot_product / (np.sqrt(norm_a) * np.sqrt(norm_b)))

def clamp_score(score: float) -> float:
    return max(-1.0, min(1.0, score))

def rank(
    query_vector: Sequence[float],
    candidates: Sequence[Tuple[str, Sequence[float]]],
    top_k: Optional[int] = None,
    min_score: Optional[float] = None,
) -> List[RankedCandidate]:
    """
    Orders candidates by similarity to `query_vector`, highest first.

    Equal scores keep their input order. `min_score` drops weaker matches and
    `top_k` caps the result, both applied after sorting.
    """
    scored = [
        RankedCandidate(id=candidate_id, score=cosine_similarity(query_vector, vector))
        for candidate_id, vector in candidates
    ]
    # sorted() is stable, so ties stay in input order
    ranked = sorted(scored, key=lambda candidate: candidate.score, reverse=True)

    if min_score is not None:
        ranked = [candidate for candidate in ranked if candidate.score >= min_score]
    if top_k is not None:
        ranked = ranked[: max(top_k, 0)]
    return ranked
