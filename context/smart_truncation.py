"""
Smart truncation: rank, tier and pack one knowledge pool.

Pipeline per pool:
    rank_items -> select_tiers -> pack -> build_context_string
"""

import logging
from typing import List, Sequence

from scoring import Scorer, keyword_overlap_score, rank_items
from shared.config import TierConfig
from shared.models import (
    Category,
    ContextItem,
    PackResult,
    PoolContext,
    Tier,
    UsedItemRef,
)

from .context_budgeting import DEFAULT_SUMMARY_LENGTH, check_budget, pack
from .context_builder import build_context_string
from .summarizer import Summarizer, summarize
from .tiering import select_tiers

logger = logging.getLogger(__name__)


def smart_truncate(
    query: str,
    items: Sequence[ContextItem],
    budget: int,
    tier_config: TierConfig,
    scorer: Scorer = keyword_overlap_score,
    summarizer: Summarizer = summarize,
    summary_length: int = DEFAULT_SUMMARY_LENGTH,
    min_snippet_chars: int = 0,
) -> PackResult:
    """
    Select and shorten items so their content fits ``budget``.

    When the whole pool already fits, every item is kept in full (in
    relevance order) and nothing is flagged. Otherwise items are ranked,
    tiered and greedily packed.

    Args:
        query: User query
        items: One pool of context items
        budget: Maximum total content characters
        tier_config: Full/summary tier sizes
        scorer: Relevance function
        summarizer: Content shortener
        summary_length: Size of summary-tier excerpts
        min_snippet_chars: Smallest shortened Full item worth keeping

    Returns:
        PackResult
    """
    check_budget(budget)
    if not items:
        return PackResult()

    ranked = rank_items(query, items, scorer)

    total_chars = sum(len(item.content) for item in items)
    if total_chars <= budget:
        return PackResult(items=[s.with_tier(Tier.FULL) for s in ranked], truncated=False)

    selection = select_tiers(ranked, tier_config)
    result = pack(
        selection.active,
        budget,
        summarizer=summarizer,
        summary_length=summary_length,
        min_snippet_chars=min_snippet_chars,
        omitted_count=len(selection.omitted),
    )

    logger.info(
        f"Smart truncation: {len(result.items)}/{len(items)} items kept, "
        f"{result.used_chars}/{budget} chars (pool total {total_chars})"
    )
    return result


def prepare_pool(
    query: str,
    items: Sequence[ContextItem],
    category: Category,
    budget: int,
    tier_config: TierConfig,
    scorer: Scorer = keyword_overlap_score,
    summarizer: Summarizer = summarize,
    summary_length: int = DEFAULT_SUMMARY_LENGTH,
    min_snippet_chars: int = 0,
) -> PoolContext:
    """
    Run smart truncation on a pool and render it.

    Returns:
        PoolContext with rendered text, truncation flag and provenance
    """
    if not items:
        return PoolContext.empty()

    result = smart_truncate(
        query,
        items,
        budget,
        tier_config,
        scorer=scorer,
        summarizer=summarizer,
        summary_length=summary_length,
        min_snippet_chars=min_snippet_chars,
    )

    if result.truncated:
        logger.warning(
            f"{Category(category).value} context truncated: "
            f"{len(result.items)} of {len(items)} items included"
        )

    return PoolContext(
        text=build_context_string(result.items, category),
        truncated=result.truncated,
        used_items=[UsedItemRef(id=s.id, title=s.title) for s in result.items],
    )


def to_context_items(
    records: Sequence,
    category: Category,
    title_attr: str = "title",
    content_attr: str = "content",
) -> List[ContextItem]:
    """
    Normalize schema objects (skills, documents) into ContextItems.

    Args:
        records: Objects exposing ``id``, a title and a content attribute
        category: Category tag for every item
        title_attr: Attribute holding the display title
        content_attr: Attribute holding the body text

    Returns:
        List of ContextItem
    """
    return [
        ContextItem(
            id=record.id,
            title=getattr(record, title_attr, None) or record.id,
            content=getattr(record, content_attr, None) or "",
            category=category,
        )
        for record in records
    ]
