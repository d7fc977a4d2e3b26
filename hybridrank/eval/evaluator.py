from __future__ import annotations

from typing import List, Sequence, Tuple

import structlog

from hybridrank.core.types import METRIC_NAMES, AggregateMetrics, EvalQuery, QueryMetrics, RetrieverFn
from hybridrank.eval.metrics import compute_query_metrics

logger = structlog.get_logger(__name__)


def evaluate_per_query(
    queries: Sequence[EvalQuery],
    retriever_fn: RetrieverFn,
    k: int = 5,
) -> List[Tuple[EvalQuery, QueryMetrics]]:
    # retriever_fn errors propagate; the caller owns retries and timeouts
    out: List[Tuple[EvalQuery, QueryMetrics]] = []
    for q in queries:
        retrieved = retriever_fn(q.query)
        out.append((q, compute_query_metrics(retrieved, q.relevant_ids, k)))
    return out


def average_metrics(per_query: Sequence[QueryMetrics]) -> AggregateMetrics:
    if not per_query:
        return AggregateMetrics()
    n = len(per_query)
    totals = {name: sum(getattr(m, name) for m in per_query) for name in METRIC_NAMES}
    return AggregateMetrics(**{name: total / n for name, total in totals.items()})


def evaluate_retrieval(
    queries: Sequence[EvalQuery],
    retriever_fn: RetrieverFn,
    k: int = 5,
) -> AggregateMetrics:
    """Mean of each per-query metric; all zeros (and no calls) for an empty set."""
    if not queries:
        return AggregateMetrics()

    per_query = [m for _, m in evaluate_per_query(queries, retriever_fn, k)]
    result = average_metrics(per_query)
    logger.info("retrieval evaluated", queries=len(queries), k=k, **result.as_dict())
    return result
