"""
Embedding-based relevance scoring.

The embedding model itself lives outside this package; callers hand in
an ``embed_fn`` that maps a list of texts to a 2-D array of vectors
(e.g. ``SentenceTransformer.encode``). Scores are cosine similarities.
"""

import logging
from typing import Callable, List, Sequence

import numpy as np

from shared.models import ContextItem

from .lexical import Scorer

logger = logging.getLogger(__name__)

EmbedFn = Callable[[List[str]], Sequence[Sequence[float]]]


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity, 0.0 when either vector is all zeros."""
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))


def item_text(item: ContextItem) -> str:
    """Text embedded for an item."""
    return f"{item.title}\n\n{item.content}".strip()


def make_embedding_scorer(embed_fn: EmbedFn) -> Scorer:
    """
    Build a scorer from an embedding function.

    Empty query or empty item text scores 0.0 without calling the model.
    The scorer embeds on every call; wrap ``embed_fn`` upstream if the
    model is expensive.

    Args:
        embed_fn: Maps texts to vectors, one row per text

    Returns:
        Scorer returning cosine similarity in [-1, 1]
    """

    def score(query: str, item: ContextItem) -> float:
        text = item_text(item)
        if not query.strip() or not text:
            return 0.0

        vectors = np.asarray(embed_fn([query, text]), dtype=np.float64)
        if vectors.ndim != 2 or vectors.shape[0] != 2:
            raise ValueError(
                f"embed_fn must return 2 vectors, got array of shape {vectors.shape}"
            )
        return cosine_similarity(vectors[0], vectors[1])

    return score
