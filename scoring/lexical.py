"""
Lexical relevance scoring.

Keyword overlap is the default scorer: cheap, deterministic and good
enough for short skill titles and SKU-like terms. BM25 is available
when a pool has enough text for term statistics to matter.
"""

import logging
import math
import re
from collections import Counter
from typing import Callable, Dict, List, Sequence

from shared.models import ContextItem

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[a-z0-9]+(?:['_-][a-z0-9]+)*")

STOPWORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "can", "do", "does",
        "for", "from", "how", "i", "in", "is", "it", "of", "on", "or", "our",
        "that", "the", "this", "to", "we", "what", "when", "where", "which",
        "who", "why", "with", "you", "your",
    }
)

Scorer = Callable[[str, ContextItem], float]


def tokenize(text: str) -> List[str]:
    """Lower-case word tokens with stopwords removed."""
    if not text:
        return []
    return [t for t in _TOKEN_RE.findall(text.lower()) if t not in STOPWORDS]


def keyword_overlap_score(
    query: str,
    item: ContextItem,
    title_weight: float = 2.0,
) -> float:
    """
    Fraction of query terms present in the item.

    A term found in the title counts ``title_weight`` times as much as
    one found only in the content. Result is in [0, 1].

    Args:
        query: User query
        item: Item to score
        title_weight: Relative weight of title matches

    Returns:
        Overlap score, 0.0 for empty query or empty item
    """
    q_terms = set(tokenize(query))
    if not q_terms:
        return 0.0

    title_terms = set(tokenize(item.title))
    content_terms = set(tokenize(item.content))
    if not title_terms and not content_terms:
        return 0.0

    score = 0.0
    for term in q_terms:
        if term in title_terms:
            score += title_weight
        elif term in content_terms:
            score += 1.0

    return score / (len(q_terms) * title_weight)


def compute_bm25_score(
    q_terms: Sequence[str],
    doc_terms: Sequence[str],
    idf: Dict[str, float],
    k1: float = 1.5,
    b: float = 0.75,
    avg_doc_len: float = 500,
) -> float:
    """
    BM25 score of one document for pre-tokenized query terms.

    Args:
        q_terms: Query terms
        doc_terms: Document terms
        idf: Inverse document frequency per term (missing terms weigh 1.0)
        k1: Term frequency saturation parameter (1.2-2.0 typical)
        b: Length normalization parameter (0.75 typical)
        avg_doc_len: Average document length in the pool

    Returns:
        BM25 score
    """
    doc_len = len(doc_terms)
    if doc_len == 0 or not q_terms:
        return 0.0

    tf = Counter(doc_terms)
    avg_doc_len = avg_doc_len or 1.0

    score = 0.0
    for term in q_terms:
        freq = tf.get(term)
        if not freq:
            continue
        numerator = freq * (k1 + 1)
        denominator = freq + k1 * (1 - b + b * (doc_len / avg_doc_len))
        score += idf.get(term, 1.0) * (numerator / denominator)

    return score


def make_bm25_scorer(
    items: Sequence[ContextItem],
    k1: float = 1.5,
    b: float = 0.75,
) -> Scorer:
    """
    Build a BM25 scorer whose term statistics come from one pool.

    The statistics are computed once up front, so the returned closure
    is a pure function of ``(query, item)``.

    Usage:
        scorer = make_bm25_scorer(items)
        ranked = rank_items(query, items, scorer)
    """
    docs = {item.id: tokenize(f"{item.title} {item.content}") for item in items}
    n_docs = len(docs)

    doc_freq: Counter = Counter()
    for terms in docs.values():
        doc_freq.update(set(terms))

    idf = {
        term: math.log((n_docs - df + 0.5) / (df + 0.5) + 1)
        for term, df in doc_freq.items()
    }
    avg_doc_len = (sum(len(t) for t in docs.values()) / n_docs) if n_docs else 0.0

    logger.debug(f"BM25 scorer built over {n_docs} items, {len(idf)} unique terms")

    def score(query: str, item: ContextItem) -> float:
        terms = docs.get(item.id)
        if terms is None:
            terms = tokenize(f"{item.title} {item.content}")
        return compute_bm25_score(tokenize(query), terms, idf, k1, b, avg_doc_len)

    return score
