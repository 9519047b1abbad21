"""
Tier selection: decide which ranked items keep full content, which are
summarized, and which are dropped before packing.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from shared.config import TierConfig
from shared.models import ScoredItem, Tier

logger = logging.getLogger(__name__)


@dataclass
class TierSelection:
    """Ranked items split by tier, each list in score order."""

    full: List[ScoredItem] = field(default_factory=list)
    summary: List[ScoredItem] = field(default_factory=list)
    omitted: List[ScoredItem] = field(default_factory=list)

    @property
    def active(self) -> List[ScoredItem]:
        """Items that go on to the packer: Full first, then Summary."""
        return self.full + self.summary


def select_tiers(ranked: Sequence[ScoredItem], tier_config: TierConfig) -> TierSelection:
    """
    Partition ranked items into Full, Summary and Omitted tiers.

    The first ``top_k_full_content`` items are Full, the next
    ``next_k_summaries`` are Summary, the rest are Omitted. A zero tier
    size just leaves that tier empty.

    Args:
        ranked: Items sorted by descending score
        tier_config: Tier sizes

    Returns:
        TierSelection with tiers assigned
    """
    top_k = tier_config.top_k_full_content
    next_k = tier_config.next_k_summaries
    if top_k < 0 or next_k < 0:
        raise ValueError(f"Tier sizes must be non-negative, got {top_k}/{next_k}")

    selection = TierSelection(
        full=[s.with_tier(Tier.FULL) for s in ranked[:top_k]],
        summary=[s.with_tier(Tier.SUMMARY) for s in ranked[top_k:top_k + next_k]],
        omitted=[s.with_tier(Tier.OMITTED) for s in ranked[top_k + next_k:]],
    )

    if selection.omitted:
        logger.debug(
            f"Tiering: {len(selection.full)} full, {len(selection.summary)} summary, "
            f"{len(selection.omitted)} omitted"
        )
    return selection
