"""
Ranking utilities: run a scorer over a pool and order the results.

Combines scores from multiple scorers when needed:
- Keyword overlap (lexical)
- BM25 (lexical, pool statistics)
- Embedding cosine similarity (semantic)
"""

import logging
import math
from typing import List, Sequence, Tuple

from shared.errors import InvalidPoolError, ScoringFailure
from shared.models import ContextItem, ScoredItem

from .lexical import Scorer, keyword_overlap_score

logger = logging.getLogger(__name__)


def ensure_unique_ids(items: Sequence[ContextItem]) -> None:
    """Raise InvalidPoolError if two items in a pool share an id."""
    seen = set()
    for item in items:
        if item.id in seen:
            raise InvalidPoolError(f"Duplicate item id in pool: {item.id!r}")
        seen.add(item.id)


def rank_items(
    query: str,
    items: Sequence[ContextItem],
    scorer: Scorer = keyword_overlap_score,
) -> List[ScoredItem]:
    """
    Score every item and sort by descending score.

    Ties keep input order (first seen wins), so identical input always
    ranks identically.

    Args:
        query: User query
        items: Pool to rank
        scorer: Relevance function ``(query, item) -> float``

    Returns:
        ScoredItems sorted by relevance

    Raises:
        InvalidPoolError: Duplicate ids in the pool
        ScoringFailure: The scorer raised or returned a non-finite score
    """
    ensure_unique_ids(items)

    scored = []
    for position, item in enumerate(items):
        try:
            score = float(scorer(query or "", item))
        except Exception as e:
            raise ScoringFailure(item.id, str(e)) from e

        if not math.isfinite(score):
            raise ScoringFailure(item.id, f"non-finite score {score}")

        scored.append(ScoredItem(item=item, score=score, position=position))

    scored.sort(key=lambda s: (-s.score, s.position))

    if scored:
        logger.debug(
            f"Ranked {len(scored)} items, top={scored[0].id} ({scored[0].score:.3f})"
        )
    return scored


def combine_scorers(weighted: Sequence[Tuple[Scorer, float]]) -> Scorer:
    """
    Weighted-sum fusion of several scorers.

    Formula: score = sum(w_i * s_i)

    Usage:
        scorer = combine_scorers([
            (keyword_overlap_score, 0.3),
            (make_embedding_scorer(model.encode), 0.7),
        ])
    """
    if not weighted:
        raise ValueError("combine_scorers needs at least one scorer")

    pairs = list(weighted)

    def score(query: str, item: ContextItem) -> float:
        return sum(weight * scorer(query, item) for scorer, weight in pairs)

    return score
