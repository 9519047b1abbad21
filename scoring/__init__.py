"""
Relevance Scoring Module.

A scorer is a plain function ``(query, item) -> float``; higher means
more relevant. Swap scorers without touching tiering or packing.

This module implements:
- Keyword overlap (default)
- BM25 over a single pool
- Embedding cosine similarity
- Weighted score fusion

Usage:
    from scoring import rank_items, make_bm25_scorer

    ranked = rank_items(query, items, make_bm25_scorer(items))
"""

from .embedding import cosine_similarity, make_embedding_scorer
from .lexical import (
    Scorer,
    compute_bm25_score,
    keyword_overlap_score,
    make_bm25_scorer,
    tokenize,
)
from .ranking import combine_scorers, ensure_unique_ids, rank_items

__all__ = [
    "Scorer",
    "tokenize",
    "keyword_overlap_score",
    "compute_bm25_score",
    "make_bm25_scorer",
    "cosine_similarity",
    "make_embedding_scorer",
    "combine_scorers",
    "ensure_unique_ids",
    "rank_items",
]
