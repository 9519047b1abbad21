"""
Tests for the budget packer and the boundary truncator
"""
import pytest

from context import pack, truncate_to_budget
from shared.errors import BudgetViolation
from shared.models import ScoredItem, Tier


def _scored(make_item, id, content, tier, score=1.0, position=0):
    return ScoredItem(item=make_item(id, content), score=score, position=position, tier=tier)


@pytest.mark.unit
class TestPack:
    """Greedy packing over Full then Summary tiers"""

    def test_everything_fits(self, make_item):
        tiered = [
            _scored(make_item, "a", "x" * 100, Tier.FULL),
            _scored(make_item, "b", "y" * 100, Tier.FULL),
        ]
        result = pack(tiered, 1000)
        assert [s.id for s in result.items] == ["a", "b"]
        assert result.truncated is False
        assert all(not s.shortened for s in result.items)

    def test_negative_budget_fails_fast(self, make_item):
        with pytest.raises(BudgetViolation):
            pack([_scored(make_item, "a", "x", Tier.FULL)], -1)
        with pytest.raises(ValueError):
            pack([], -5)

    def test_zero_budget_drops_everything(self, make_item):
        result = pack([_scored(make_item, "a", "x" * 10, Tier.FULL)], 0)
        assert result.items == []
        assert result.truncated is True

    def test_full_item_shortened_to_remaining(self, make_item):
        tiered = [
            _scored(make_item, "a", "alpha " * 10, Tier.FULL),
            _scored(make_item, "b", "bravo " * 10, Tier.FULL),
        ]
        result = pack(tiered, 100)
        assert [s.id for s in result.items] == ["a", "b"]
        assert result.items[0].shortened is False
        assert result.items[1].shortened is True
        assert result.used_chars <= 100
        assert result.truncated is True

    def test_min_snippet_drops_small_leftovers(self, make_item):
        tiered = [
            _scored(make_item, "a", "alpha " * 10, Tier.FULL),
            _scored(make_item, "b", "bravo " * 10, Tier.FULL),
        ]
        result = pack(tiered, 100, min_snippet_chars=50)
        assert [s.id for s in result.items] == ["a"]
        assert result.truncated is True

    def test_summary_tier_always_summarized(self, make_item):
        long_text = "Sentence number one. " * 50
        tiered = [_scored(make_item, "a", long_text, Tier.SUMMARY)]
        result = pack(tiered, 10000, summary_length=200)
        assert len(result.items) == 1
        assert len(result.items[0].content) <= 200
        assert result.items[0].tier is Tier.SUMMARY
        assert result.truncated is True

    def test_summary_sized_to_remaining(self, make_item):
        tiered = [
            _scored(make_item, "a", "x" * 950, Tier.FULL),
            _scored(make_item, "b", "word " * 100, Tier.SUMMARY),
        ]
        result = pack(tiered, 1000, summary_length=500)
        assert len(result.items[1].content) <= 50
        assert result.used_chars <= 1000

    def test_full_tier_packed_before_summary(self, make_item):
        tiered = [
            _scored(make_item, "s", "summary text", Tier.SUMMARY),
            _scored(make_item, "f", "full text", Tier.FULL),
        ]
        result = pack(tiered, 1000)
        assert [s.id for s in result.items] == ["f", "s"]

    def test_omitted_items_force_truncated(self, make_item):
        result = pack([_scored(make_item, "a", "x", Tier.FULL)], 1000, omitted_count=3)
        assert result.truncated is True

        tiered = [
            _scored(make_item, "a", "x", Tier.FULL),
            _scored(make_item, "b", "y", Tier.OMITTED),
        ]
        result = pack(tiered, 1000)
        assert [s.id for s in result.items] == ["a"]
        assert result.truncated is True

    def test_higher_ranked_item_wins_when_only_one_fits(self, make_item):
        tiered = [
            _scored(make_item, "high", "h" * 100, Tier.FULL, score=0.9, position=1),
            _scored(make_item, "low", "l" * 100, Tier.FULL, score=0.1, position=0),
        ]
        result = pack(tiered, 100)
        assert [s.id for s in result.items] == ["high"]

    def test_summarizer_breaking_its_contract_is_an_error(self, make_item):
        tiered = [_scored(make_item, "a", "x" * 800, Tier.SUMMARY)]
        with pytest.raises(ValueError):
            pack(tiered, 1000, summarizer=lambda content, target: content)


@pytest.mark.unit
class TestTruncateToBudget:
    """Boundary truncation of a single text blob"""

    def test_under_budget_unchanged(self):
        result = truncate_to_budget("short text", 100)
        assert result.text == "short text"
        assert result.truncated is False

    def test_cuts_on_whitespace(self):
        text = "customer insight " * 3000
        text = text[:50000]
        result = truncate_to_budget(text, 40000)

        assert result.truncated is True
        assert len(result.text) <= 40000
        assert text.startswith(result.text)
        assert text[len(result.text)].isspace()

    def test_cut_point_is_nearest_whitespace(self):
        result = truncate_to_budget("alpha beta gamma delta", 13)
        assert result.text == "alpha beta"

    def test_paragraph_boundary(self):
        text = "First paragraph here.\n\nSecond paragraph follows with more words."
        result = truncate_to_budget(text, 25)
        assert result.text == "First paragraph here."

    def test_no_whitespace_hard_cut(self):
        result = truncate_to_budget("x" * 100, 40)
        assert result.text == "x" * 40
        assert result.truncated is True

    def test_never_splits_multibyte_characters(self):
        result = truncate_to_budget("héllo wörld ünïcode", 12)
        assert result.text == "héllo wörld"
        result.text.encode("utf-8")

    def test_idempotent(self):
        text = "lorem ipsum dolor sit amet " * 100
        once = truncate_to_budget(text, 500)
        again = truncate_to_budget(once.text, 500)
        larger = truncate_to_budget(once.text, 800)

        assert again.text == once.text
        assert again.truncated is False
        assert larger.text == once.text

    def test_zero_budget(self):
        result = truncate_to_budget("something", 0)
        assert result.text == ""
        assert result.truncated is True

    def test_negative_budget(self):
        with pytest.raises(BudgetViolation):
            truncate_to_budget("text", -1)
