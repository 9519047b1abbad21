"""
Context Assembly Module.

Treat prompt context as a resource with a budget.

This module handles:
- Tier selection (full content / summary / omitted)
- Summarization of summary-tier items
- Greedy budget packing per knowledge pool
- Boundary truncation of composed text blobs
- Labeled context rendering and system prompt construction

Best practices:
- Highest relevance first, degrade the tail before dropping it
- Truncation is a flag, never an exception
- Keep every budget local to one call

Usage:
    from context import prepare_pool, build_system_prompt

    skills = prepare_pool(query, items, Category.SKILL, 100000, TierConfig(10, 10))
    prompt = build_system_prompt(skills_context=skills.text)
"""

from .context_budgeting import check_budget, pack, truncate_to_budget
from .context_builder import (
    SECTION_SEPARATOR,
    build_context_string,
    build_system_prompt,
    format_item_header,
    get_base_prompt,
    section_overhead,
)
from .customer_context import (
    compose_customer_text,
    format_customer_profile,
    prepare_customer_context,
)
from .smart_truncation import prepare_pool, smart_truncate, to_context_items
from .summarizer import Summarizer, head_truncate, summarize
from .tiering import TierSelection, select_tiers
from .token_utils import (
    count_tokens,
    estimate_tokens,
    format_token_count,
    get_token_usage_status,
)

__all__ = [
    "check_budget",
    "pack",
    "truncate_to_budget",
    "SECTION_SEPARATOR",
    "build_context_string",
    "build_system_prompt",
    "format_item_header",
    "get_base_prompt",
    "section_overhead",
    "compose_customer_text",
    "format_customer_profile",
    "prepare_customer_context",
    "prepare_pool",
    "smart_truncate",
    "to_context_items",
    "Summarizer",
    "head_truncate",
    "summarize",
    "TierSelection",
    "select_tiers",
    "count_tokens",
    "estimate_tokens",
    "format_token_count",
    "get_token_usage_status",
]
