# bibcrawl/analytics/similarity.py
import math
from collections.abc import Sequence

from bibcrawl.analytics.tokenize import tokenize
from bibcrawl.models import Record, SimilarityHit

MIN_SCORE = 0.1


def find_similar(
    target: Record,
    candidates: Sequence[Record],
    limit: int = 5,
) -> list[SimilarityHit]:
    """Rank candidates by title overlap with `target`.

    score = overlap / sqrt(|target terms| * |candidate terms|), where the
    target side is a set and the candidate side keeps repeated terms. The
    target itself (same id) is never returned.
    """
    target_terms = set(tokenize(target.title))

    hits = []
    for candidate in candidates:
        if candidate is target or candidate.id == target.id:
            continue
        candidate_terms = tokenize(candidate.title)
        shared = [t for t in candidate_terms if t in target_terms]
        score = len(shared) / (math.sqrt(len(target_terms) * len(candidate_terms)) or 1)
        if score > MIN_SCORE:
            hits.append(SimilarityHit(record=candidate, score=score, shared_terms=tuple(shared)))

    hits.sort(key=lambda h: h.score, reverse=True)
    return hits[:limit]
