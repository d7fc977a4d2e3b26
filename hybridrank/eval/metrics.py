"""
Per-query retrieval quality metrics with binary relevance.

Every function takes a ranked list (already in evaluation order) and the set
of relevant ids, and returns a float in [0, 1]. Degenerate inputs (empty
lists, empty relevant sets, k <= 0) score 0 instead of raising.
"""
from __future__ import annotations

import math
from typing import AbstractSet, Sequence

from hybridrank.core.types import QueryMetrics, ScoredItem


def _hits(items: Sequence[ScoredItem], relevant: AbstractSet[str], k: int) -> int:
    if k <= 0:
        return 0
    return sum(1 for item in items[:k] if item.id in relevant)


def reciprocal_rank(items: Sequence[ScoredItem], relevant: AbstractSet[str]) -> float:
    """RR = 1 / position of the first relevant item (1-based); 0 if none."""
    for position, item in enumerate(items, start=1):
        if item.id in relevant:
            return 1.0 / position
    return 0.0


def dcg_at_k(items: Sequence[ScoredItem], relevant: AbstractSet[str], k: int) -> float:
    """DCG@k = sum(rel_i / log2(i + 2)) over the first k items, i 0-based."""
    if k <= 0:
        return 0.0
    return sum(
        1.0 / math.log2(i + 2)
        for i, item in enumerate(items[:k])
        if item.id in relevant
    )


def idcg_at_k(relevant_count: int, k: int) -> float:
    """Best achievable DCG@k: every relevant item ranked first."""
    ideal = min(relevant_count, k)
    return sum(1.0 / math.log2(i + 2) for i in range(max(ideal, 0)))


def ndcg_at_k(items: Sequence[ScoredItem], relevant: AbstractSet[str], k: int) -> float:
    idcg = idcg_at_k(len(relevant), k)
    if idcg == 0:
        return 0.0
    return dcg_at_k(items, relevant, k) / idcg


def precision_at_k(items: Sequence[ScoredItem], relevant: AbstractSet[str], k: int) -> float:
    # Divides by k, not by len(items[:k]): short lists are penalized.
    if k <= 0:
        return 0.0
    return _hits(items, relevant, k) / k


def recall_at_k(items: Sequence[ScoredItem], relevant: AbstractSet[str], k: int) -> float:
    if not relevant:
        return 0.0
    return _hits(items, relevant, k) / len(relevant)


def f1_at_k(items: Sequence[ScoredItem], relevant: AbstractSet[str], k: int) -> float:
    p = precision_at_k(items, relevant, k)
    r = recall_at_k(items, relevant, k)
    if p + r == 0:
        return 0.0
    return 2 * p * r / (p + r)


def hit_rate(items: Sequence[ScoredItem], relevant: AbstractSet[str], k: int) -> float:
    return 1.0 if _hits(items, relevant, k) > 0 else 0.0


def compute_query_metrics(items: Sequence[ScoredItem], relevant: AbstractSet[str], k: int = 5) -> QueryMetrics:
    return QueryMetrics(
        mrr=reciprocal_rank(items, relevant),
        ndcg=ndcg_at_k(items, relevant, k),
        precision_at_k=precision_at_k(items, relevant, k),
        recall_at_k=recall_at_k(items, relevant, k),
        f1_at_k=f1_at_k(items, relevant, k),
        hit_rate=hit_rate(items, relevant, k),
    )
