"""
Context rendering and system prompt construction.

Best practices:
- One labeled section per item, highest relevance first
- Item ids in headers so a reader can map sections back to sources
- Fixed section order in the system prompt for reproducible prompts
"""

import logging
from typing import Dict, List, Optional, Sequence

from shared.models import Category, ScoredItem, Tier

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n\n---\n\n"

CATEGORY_LABELS: Dict[Category, str] = {
    Category.SKILL: "Skill",
    Category.DOCUMENT: "Document",
    Category.CUSTOMER: "Customer",
    Category.URL: "URL",
}


def format_item_header(
    scored: ScoredItem,
    index: int,
    category: Category,
) -> str:
    """
    Format a section header for one item.

    Example:
    [Skill 1] id=sk_42 | tier: summary
    Title: Pricing Playbook

    Args:
        scored: Packed item
        index: Position in the rendered block
        category: Pool category, selects the label

    Returns:
        Header string
    """
    label = CATEGORY_LABELS[Category(category)]
    header = f"[{label} {index + 1}] id={scored.id}"
    if scored.tier is Tier.SUMMARY or scored.shortened:
        header += f" | tier: {scored.tier.value}"
        if scored.shortened:
            header += " (shortened)"
    if scored.title:
        header += f"\nTitle: {scored.title}"
    return header


def format_section(scored: ScoredItem, index: int, category: Category) -> str:
    header = format_item_header(scored, index, category)
    if not scored.content:
        return header
    return f"{header}\n\n{scored.content}"


def build_context_string(
    items: Sequence[ScoredItem],
    category: Category,
    separator: str = SECTION_SEPARATOR,
) -> str:
    """
    Render packed items into a labeled block for prompt insertion.

    No truncation happens here; items already satisfy the budget.

    Args:
        items: Packed items in inclusion order
        category: Pool category
        separator: Text between sections

    Returns:
        Rendered block, ``""`` for no items
    """
    return separator.join(
        format_section(scored, i, category) for i, scored in enumerate(items)
    )


def section_overhead(
    items: Sequence[ScoredItem],
    category: Category,
    separator: str = SECTION_SEPARATOR,
) -> int:
    """Characters the rendered block adds on top of item content."""
    rendered = build_context_string(items, category, separator)
    return len(rendered) - sum(len(s.content) for s in items)


# Prompt templates

BASE_SYSTEM_PROMPT = """You are a helpful AI assistant with access to knowledge base information including skills, documents, customer profiles, and reference URLs.

Please provide accurate, helpful responses based on the knowledge provided."""


CALL_MODE_SYSTEM_PROMPT = """You are a helpful AI assistant designed to provide ultra-brief answers during live customer calls.
Your responses should be:
- EXTREMELY CONCISE (1-3 sentences maximum)
- DIRECT and actionable
- Optimized for verbal delivery
- No long explanations or lists unless explicitly asked

Keep it short and conversational."""


# Order matters: prompt-level tests rely on it
PROMPT_SECTIONS = (
    ("skills", "Skills Knowledge"),
    ("customers", "Customer Profiles"),
    ("documents", "Documents"),
    ("urls", "Reference URLs"),
    ("instructions", "Additional Instructions"),
)


def get_base_prompt(call_mode: bool = False) -> str:
    return CALL_MODE_SYSTEM_PROMPT if call_mode else BASE_SYSTEM_PROMPT


def build_system_prompt(
    skills_context: str = "",
    customer_context: str = "",
    document_context: str = "",
    url_context: str = "",
    user_instructions: str = "",
    call_mode: bool = False,
    base_prompt: Optional[str] = None,
) -> str:
    """
    Build the system prompt from rendered pool blocks.

    Sections appear in a fixed order (skills, customers, documents,
    urls, user instructions); empty ones are left out.

    Args:
        skills_context: Rendered skills block
        customer_context: Composed customer profile text
        document_context: Rendered documents block
        url_context: Rendered URLs block
        user_instructions: Free-text instructions from the user
        call_mode: Use the ultra-brief live call base prompt
        base_prompt: Override the base prompt entirely

    Returns:
        Complete system prompt string
    """
    blocks = {
        "skills": skills_context,
        "customers": customer_context,
        "documents": document_context,
        "urls": url_context,
        "instructions": user_instructions,
    }

    sections: List[str] = [base_prompt if base_prompt is not None else get_base_prompt(call_mode)]
    for key, heading in PROMPT_SECTIONS:
        if blocks[key]:
            sections.append(f"\n## {heading}\n{blocks[key]}")

    return "\n".join(sections)
