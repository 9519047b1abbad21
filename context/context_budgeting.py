"""
Context budget management.

Treat prompt context as a resource with a budget.

Two enforcers live here:
- pack: greedy packer for tiered, ranked items
- truncate_to_budget: boundary cut for a single pre-composed text blob

Running out of budget is the normal case, never an exception; it is
reported through the ``truncated`` flag.
"""

import logging
from typing import Sequence

from shared.errors import BudgetViolation
from shared.models import PackResult, ScoredItem, Tier, TruncationResult

from .summarizer import Summarizer, summarize

logger = logging.getLogger(__name__)

DEFAULT_SUMMARY_LENGTH = 500


def check_budget(budget: int) -> None:
    """Fail fast on a negative budget."""
    if budget is None or budget < 0:
        raise BudgetViolation(budget, f"Budget must be non-negative, got {budget}")


def pack(
    tiered: Sequence[ScoredItem],
    budget: int,
    summarizer: Summarizer = summarize,
    summary_length: int = DEFAULT_SUMMARY_LENGTH,
    min_snippet_chars: int = 0,
    omitted_count: int = 0,
) -> PackResult:
    """
    Greedily fit tiered items into a character budget.

    Full-tier items are attempted first in score order, then Summary-tier
    items. A Full item that does not fit is shortened to the remaining
    budget; a Summary item is always summarized, to the lesser of
    ``summary_length`` and the remaining budget. Items that get no room
    are skipped. Anything skipped, shortened or summarized sets
    ``truncated``, as does a non-zero ``omitted_count``.

    Args:
        tiered: Items with tiers assigned (Omitted items are ignored)
        budget: Maximum total content characters
        summarizer: Content shortener, result must respect its target
        summary_length: Fixed size of a summary-tier excerpt
        min_snippet_chars: Remaining budget at or below this drops the item
        omitted_count: Items the tier selector already dropped

    Returns:
        PackResult with included items in inclusion order

    Raises:
        BudgetViolation: Negative budget
    """
    check_budget(budget)

    remaining = budget
    truncated = omitted_count > 0
    output = []

    full, summary = [], []
    for s in tiered:
        if s.tier is Tier.FULL:
            full.append(s)
        elif s.tier is Tier.SUMMARY:
            summary.append(s)
        elif s.tier is Tier.OMITTED:
            truncated = True
        else:
            raise ValueError(f"Unhandled tier: {s.tier!r}")

    for scored in full + summary:
        content = scored.item.content
        if scored.tier is Tier.FULL:
            target = remaining
        else:
            # Summary tier never carries full content
            target = min(summary_length, remaining)
            truncated = True

        if remaining <= 0 or (len(content) > target and target <= min_snippet_chars):
            logger.debug(f"No budget left for {scored.id} ({scored.tier.value})")
            truncated = True
            continue

        if scored.tier is Tier.SUMMARY:
            packed = scored.with_content(summarizer(content, target))
        elif len(content) <= target:
            packed = scored.with_content(content)
        else:
            packed = scored.with_content(summarizer(content, target))
            truncated = True

        if len(packed.content) > target:
            raise ValueError(
                f"Summarizer exceeded its target for {scored.id}: "
                f"{len(packed.content)} > {target}"
            )

        output.append(packed)
        remaining -= len(packed.content)

    logger.debug(
        f"Packed {len(output)}/{len(tiered) + omitted_count} items, "
        f"{budget - remaining}/{budget} chars, truncated={truncated}"
    )
    return PackResult(items=output, truncated=truncated)


def truncate_to_budget(text: str, budget: int) -> TruncationResult:
    """
    Cut a text blob to fit a character budget.

    The cut lands on the last whitespace at or before the budget so
    words are never split; trailing whitespace is dropped. Only a window
    with no whitespace at all is hard-cut at the budget. Re-truncating
    the output with the same or a larger budget returns it unchanged.

    Args:
        text: Pre-composed text
        budget: Maximum characters

    Returns:
        TruncationResult with the (possibly) shortened text

    Raises:
        BudgetViolation: Negative budget
    """
    check_budget(budget)
    text = text or ""

    if len(text) <= budget:
        return TruncationResult(text=text, truncated=False)

    # text[budget] exists here; a whitespace there means text[:budget] ends cleanly
    cut = budget
    while cut > 0 and not text[cut].isspace():
        cut -= 1

    if cut == 0 and not text[0].isspace():
        result = text[:budget]
    else:
        result = text[:cut].rstrip()

    logger.debug(f"Boundary truncation: {len(text)} -> {len(result)} chars (budget {budget})")
    return TruncationResult(text=result, truncated=True)
