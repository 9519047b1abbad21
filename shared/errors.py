"""
Error taxonomy for the context assembly engine.

Running out of budget is NOT an error: truncation, summarization and
omission are reported through the ``truncated`` flag on results.
The exceptions below signal programming errors or broken plug-ins.
"""


class ContextEngineError(Exception):
    """Base class for context engine errors."""


class BudgetViolation(ContextEngineError, ValueError):
    """A budget that must be non-negative (or positive) was not."""

    def __init__(self, budget: int, message: str = None):
        self.budget = budget
        super().__init__(message or f"Invalid budget: {budget}")


class ScoringFailure(ContextEngineError, RuntimeError):
    """The plugged-in relevance scorer raised or returned a bad score."""

    def __init__(self, item_id: str, message: str):
        self.item_id = item_id
        super().__init__(f"Scoring failed for item {item_id!r}: {message}")


class InvalidPoolError(ContextEngineError, ValueError):
    """A knowledge pool violates its invariants (e.g. duplicate ids)."""
