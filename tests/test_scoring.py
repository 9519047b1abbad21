"""
Tests for relevance scorers and ranking
"""
import math

import pytest

from scoring import (
    combine_scorers,
    keyword_overlap_score,
    make_bm25_scorer,
    make_embedding_scorer,
    rank_items,
    tokenize,
)
from shared.errors import InvalidPoolError, ScoringFailure


@pytest.mark.unit
class TestKeywordOverlap:
    """Default keyword overlap scorer"""

    def test_tokenize_drops_stopwords_and_case(self):
        assert tokenize("What is THE Refund Policy?") == ["refund", "policy"]

    def test_empty_query_scores_zero(self, make_item):
        assert keyword_overlap_score("", make_item("a", "refund policy")) == 0.0

    def test_empty_item_scores_zero(self, make_item):
        item = make_item("a", "", title="")
        assert keyword_overlap_score("refund", item) == 0.0

    def test_title_match_beats_content_match(self, make_item):
        in_title = make_item("a", "unrelated text", title="Refund policy")
        in_content = make_item("b", "our refund policy", title="Billing")
        assert keyword_overlap_score("refund", in_title) > keyword_overlap_score("refund", in_content)

    def test_score_in_unit_range(self, make_item):
        item = make_item("a", "refund window thirty days", title="Refund")
        score = keyword_overlap_score("refund days", item)
        assert 0.0 < score <= 1.0

    def test_deterministic(self, make_item):
        item = make_item("a", "pricing tiers and discounts")
        assert keyword_overlap_score("discounts", item) == keyword_overlap_score("discounts", item)


@pytest.mark.unit
class TestBM25Scorer:
    """Pool-aware BM25 scorer"""

    def test_matching_item_ranks_first(self, make_item):
        items = [
            make_item("a", "security questionnaire answers"),
            make_item("b", "refund policy is thirty days refund"),
            make_item("c", "onboarding checklist"),
        ]
        scorer = make_bm25_scorer(items)
        ranked = rank_items("refund", items, scorer)
        assert ranked[0].id == "b"
        assert ranked[0].score > 0
        assert ranked[1].score == 0.0

    def test_unknown_item_still_scored(self, make_item):
        scorer = make_bm25_scorer([make_item("a", "alpha")])
        assert scorer("beta", make_item("z", "beta beta")) > 0

    def test_empty_pool(self, make_item):
        scorer = make_bm25_scorer([])
        assert scorer("anything", make_item("a", "")) == 0.0


def _fake_embed(texts):
    return [[t.count("cat"), t.count("dog")] for t in texts]


@pytest.mark.unit
class TestEmbeddingScorer:
    """Cosine similarity scorer over injected embeddings"""

    def test_cosine_similarity(self, make_item):
        scorer = make_embedding_scorer(_fake_embed)
        assert math.isclose(scorer("cat", make_item("a", "cat cat", title="")), 1.0)
        assert scorer("cat", make_item("b", "dog", title="")) == 0.0

    def test_empty_query_skips_model(self, make_item):
        def exploding(texts):
            raise AssertionError("model should not be called")

        scorer = make_embedding_scorer(exploding)
        assert scorer("   ", make_item("a", "cat")) == 0.0

    def test_bad_shape_becomes_scoring_failure(self, make_item):
        scorer = make_embedding_scorer(lambda texts: [[1.0, 0.0]])
        with pytest.raises(ScoringFailure):
            rank_items("cat", [make_item("a", "cat")], scorer)


@pytest.mark.unit
class TestRanking:
    """rank_items ordering and failure semantics"""

    def test_sorted_descending_with_stable_ties(self, make_item):
        items = [
            make_item("a", "nothing here"),
            make_item("b", "pricing guide"),
            make_item("c", "also nothing"),
            make_item("d", "pricing again"),
        ]
        ranked = rank_items("pricing", items)
        assert [s.id for s in ranked] == ["b", "d", "a", "c"]
        assert [s.position for s in ranked] == [1, 3, 0, 2]

    def test_empty_query_keeps_input_order(self, make_item):
        items = [make_item(str(i), "text") for i in range(5)]
        assert [s.id for s in rank_items("", items)] == ["0", "1", "2", "3", "4"]

    def test_duplicate_ids_rejected(self, make_item):
        with pytest.raises(InvalidPoolError):
            rank_items("q", [make_item("a"), make_item("a")])

    def test_scorer_exception_propagates_as_scoring_failure(self, make_item):
        def broken(query, item):
            raise KeyError("boom")

        with pytest.raises(ScoringFailure) as exc_info:
            rank_items("q", [make_item("a")], broken)
        assert exc_info.value.item_id == "a"
        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_non_finite_score_rejected(self, make_item):
        with pytest.raises(ScoringFailure):
            rank_items("q", [make_item("a")], lambda q, i: float("nan"))

    def test_combine_scorers_weighted_sum(self, make_item):
        scorer = combine_scorers([(lambda q, i: 1.0, 0.25), (lambda q, i: 2.0, 0.5)])
        assert scorer("q", make_item("a")) == pytest.approx(1.25)

    def test_combine_scorers_requires_input(self):
        with pytest.raises(ValueError):
            combine_scorers([])
