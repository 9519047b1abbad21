"""
Configuration module for the context assembly engine.
Manages environment variables and per-pool budgets with validation.
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Optional

from .errors import BudgetViolation


@dataclass
class TierConfig:
    """How many items of a pool get full content and how many get summaries."""
    top_k_full_content: int = 5
    next_k_summaries: int = 5

    def __post_init__(self):
        if self.top_k_full_content < 0 or self.next_k_summaries < 0:
            raise ValueError(
                f"Tier sizes must be non-negative, got "
                f"{self.top_k_full_content}/{self.next_k_summaries}"
            )


@dataclass
class PoolConfig:
    """Budget (characters) and tier sizes for one knowledge pool."""
    budget: int
    tiers: TierConfig = field(default_factory=TierConfig)

    def __post_init__(self):
        if self.budget <= 0:
            raise BudgetViolation(self.budget, f"Pool budget must be positive, got {self.budget}")


@dataclass
class SummaryConfig:
    """Summary-tier sizing."""
    summary_length: int = 500
    min_snippet_chars: int = 0  # Full-tier leftovers at or below this are dropped


@dataclass
class LLMConfig:
    """LLM request parameters reported alongside the assembled prompt."""
    model: str = "claude-3-5-sonnet-20241022"
    quick_model: str = "claude-3-5-haiku-20241022"
    temperature: float = 0.3
    call_temperature: float = 0.2
    max_tokens: int = 8192
    call_max_tokens: int = 300


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


@dataclass
class Settings:
    """Main application settings loaded from environment."""

    # Per-pool character budgets
    SKILLS_CONTEXT_LIMIT: int = field(default_factory=lambda: _env_int("SKILLS_CONTEXT_LIMIT", 100000))
    DOCUMENTS_CONTEXT_LIMIT: int = field(default_factory=lambda: _env_int("DOCUMENTS_CONTEXT_LIMIT", 80000))
    URLS_CONTEXT_LIMIT: int = field(default_factory=lambda: _env_int("URLS_CONTEXT_LIMIT", 30000))
    CUSTOMERS_CONTEXT_LIMIT: int = field(default_factory=lambda: _env_int("CUSTOMERS_CONTEXT_LIMIT", 40000))

    # Summary tier
    SUMMARY_LENGTH: int = field(default_factory=lambda: _env_int("SUMMARY_LENGTH", 500))
    MIN_SNIPPET_CHARS: int = field(default_factory=lambda: _env_int("MIN_SNIPPET_CHARS", 0))

    # Application settings
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    AUDIT_LOG_FILE: Optional[str] = field(default_factory=lambda: os.getenv("AUDIT_LOG_FILE"))

    # Nested configs
    llm: LLMConfig = field(default_factory=LLMConfig)
    summary: SummaryConfig = field(init=False)
    pools: Dict[str, PoolConfig] = field(init=False)

    def __post_init__(self):
        if self.SUMMARY_LENGTH <= 0:
            raise BudgetViolation(self.SUMMARY_LENGTH, "SUMMARY_LENGTH must be positive")
        if self.MIN_SNIPPET_CHARS < 0:
            raise BudgetViolation(self.MIN_SNIPPET_CHARS, "MIN_SNIPPET_CHARS must be non-negative")
        self.summary = SummaryConfig(
            summary_length=self.SUMMARY_LENGTH,
            min_snippet_chars=self.MIN_SNIPPET_CHARS,
        )
        self.pools = {
            "skills": PoolConfig(self.SKILLS_CONTEXT_LIMIT, TierConfig(10, 10)),
            "documents": PoolConfig(self.DOCUMENTS_CONTEXT_LIMIT, TierConfig(5, 5)),
            "urls": PoolConfig(self.URLS_CONTEXT_LIMIT, TierConfig(5, 5)),
            # Customer profiles go through the boundary truncator, tiers unused
            "customers": PoolConfig(self.CUSTOMERS_CONTEXT_LIMIT, TierConfig(0, 0)),
        }

    def get_pool(self, name: str) -> PoolConfig:
        """Look up a pool's budget and tier sizes."""
        try:
            return self.pools[name]
        except KeyError:
            raise KeyError(f"Unknown knowledge pool: {name}") from None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Apply LOG_LEVEL to the root logger."""
    logging.basicConfig(
        level=(level or get_settings().LOG_LEVEL).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

