"""
Value objects shared by the context assembly pipeline.

Everything here is created and consumed within a single request.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional


class Category(str, Enum):
    """Knowledge pool an item belongs to. Selects header and budget bucket."""

    SKILL = "skill"
    DOCUMENT = "document"
    CUSTOMER = "customer"
    URL = "url"


class Tier(Enum):
    """Degradation level assigned before budget packing."""

    FULL = "full"
    SUMMARY = "summary"
    OMITTED = "omitted"


@dataclass(frozen=True)
class ContextItem:
    """Normalized knowledge unit: skill, document, customer profile or URL."""

    id: str
    title: str
    content: str
    category: Category

    def __post_init__(self):
        if self.content is None:
            object.__setattr__(self, "content", "")
        if not isinstance(self.category, Category):
            object.__setattr__(self, "category", Category(self.category))


@dataclass(frozen=True)
class ScoredItem:
    """A ContextItem with its relevance score, tier and emitted content."""

    item: ContextItem
    score: float
    position: int
    tier: Tier = Tier.OMITTED
    content: Optional[str] = None
    shortened: bool = False

    def __post_init__(self):
        if self.content is None:
            object.__setattr__(self, "content", self.item.content)

    @property
    def id(self) -> str:
        return self.item.id

    @property
    def title(self) -> str:
        return self.item.title

    @property
    def category(self) -> Category:
        return self.item.category

    def with_tier(self, tier: Tier) -> "ScoredItem":
        return replace(self, tier=tier)

    def with_content(self, content: str) -> "ScoredItem":
        """Copy carrying shortened content."""
        return replace(self, content=content, shortened=content != self.item.content)


@dataclass
class PackResult:
    """Items that fit the budget, in inclusion order, plus the truncation flag."""

    items: List[ScoredItem] = field(default_factory=list)
    truncated: bool = False

    @property
    def used_chars(self) -> int:
        return sum(len(i.content) for i in self.items)


@dataclass
class TruncationResult:
    """Output of the boundary truncator."""

    text: str
    truncated: bool


@dataclass
class UsedItemRef:
    """Provenance entry: which item reached the prompt."""

    id: str
    title: str


@dataclass
class PoolContext:
    """Rendered block for one pool plus what went into it."""

    text: str = ""
    truncated: bool = False
    used_items: List[UsedItemRef] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "PoolContext":
        return cls()
