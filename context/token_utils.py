"""
Token estimation utilities for LLM context management.

Budgets are enforced in characters; these helpers translate to tokens
for display and reporting. ``estimate_tokens`` is a rough ~4 chars per
token approximation; ``count_tokens`` is exact for cl100k_base and can be
passed to ``KnowledgeChatService(token_counter=...)`` for exact
transparency figures.
"""

import logging
import math
from functools import lru_cache
from typing import Dict

import tiktoken

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN = 4


@lru_cache(maxsize=None)
def _get_encoding(name: str = "cl100k_base"):
    # Loading the BPE ranks can hit the network on first use
    return tiktoken.get_encoding(name)


def count_tokens(text: str, encoding: str = "cl100k_base") -> int:
    """Exact token count."""
    if not text:
        return 0
    return len(_get_encoding(encoding).encode(text))


def estimate_tokens(text: str) -> int:
    """
    Estimate token count from text.

    Rounds up so estimates err on the side of overcounting.
    """
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def format_token_count(tokens: int) -> str:
    """Show "12.5k" for large numbers, raw number for small."""
    if tokens >= 1000:
        return f"{tokens / 1000:.1f}k"
    return str(tokens)


def get_token_usage_status(used_tokens: int, max_tokens: int) -> Dict:
    """
    Calculate token usage percentage and status.

    Args:
        used_tokens: Tokens in use
        max_tokens: Limit

    Returns:
        Dict with usage_percent, is_high (>70%) and is_critical (>90%)
    """
    if max_tokens <= 0:
        raise ValueError(f"max_tokens must be positive, got {max_tokens}")

    usage_percent = min(100, round(used_tokens / max_tokens * 100))
    return {
        "usage_percent": usage_percent,
        "is_high": usage_percent > 70,
        "is_critical": usage_percent > 90,
    }
