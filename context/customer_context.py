"""
Customer profile context.

Profiles are composed into one narrative and cut with the boundary
truncator; ranking does not apply to them.
"""

import logging
from typing import List, Sequence

from shared.models import PoolContext, UsedItemRef
from shared.schemas import CustomerProfile

from .context_budgeting import truncate_to_budget

logger = logging.getLogger(__name__)


def format_customer_profile(profile: CustomerProfile) -> str:
    """
    Render one profile.

    Uses the unified ``content`` field when present, otherwise the
    legacy overview/products/challenges/key facts fields.
    """
    parts: List[str] = [f"### {profile.name}"]
    if profile.industry:
        parts.append(f"Industry: {profile.industry}")

    if profile.content:
        parts.append(profile.content)
    else:
        if profile.overview:
            parts.append(f"Overview: {profile.overview}")
        if profile.products:
            parts.append(f"Products/Services: {profile.products}")
        if profile.challenges:
            parts.append(f"Challenges: {profile.challenges}")
        if profile.key_facts:
            parts.append(
                "Key Facts:\n"
                + "\n".join(f"- {fact.label}: {fact.value}" for fact in profile.key_facts)
            )

    if profile.considerations:
        parts.append("Considerations:\n" + "\n".join(f"- {c}" for c in profile.considerations))

    return "\n".join(parts)


def compose_customer_text(profiles: Sequence[CustomerProfile]) -> str:
    """All profiles, separated by blank lines."""
    return "\n\n".join(format_customer_profile(p) for p in profiles)


def prepare_customer_context(
    profiles: Sequence[CustomerProfile],
    budget: int,
) -> PoolContext:
    """
    Compose and boundary-truncate customer profiles.

    Every supplied profile is reported as used, even when the cut
    removed part of its text.
    """
    if not profiles:
        return PoolContext.empty()

    result = truncate_to_budget(compose_customer_text(profiles), budget)
    if result.truncated:
        logger.warning(f"Customer context truncated to {len(result.text)} chars (budget {budget})")

    return PoolContext(
        text=result.text,
        truncated=result.truncated,
        used_items=[UsedItemRef(id=p.id, title=p.name) for p in profiles],
    )
