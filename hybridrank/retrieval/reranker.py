from __future__ import annotations

from typing import List, Optional, Sequence

from hybridrank.core.types import FusionOptions, FusionStrategy, RankedChunk
from hybridrank.retrieval.fusion import rerank_by_rrf, rerank_by_score
from hybridrank.retrieval.weights import DEFAULT_WEIGHTS, FusionWeights, compute_adaptive_weights


def resolve_weights(options: FusionOptions) -> FusionWeights:
    """Explicit weights win; missing ones come from the query shape, else the defaults."""
    if options.keyword_weight is not None and options.vector_weight is not None:
        return FusionWeights(options.keyword_weight, options.vector_weight)

    fallback = compute_adaptive_weights(options.query) if options.query else DEFAULT_WEIGHTS
    return FusionWeights(
        keyword_weight=fallback.keyword_weight if options.keyword_weight is None else options.keyword_weight,
        vector_weight=fallback.vector_weight if options.vector_weight is None else options.vector_weight,
    )


def rerank(
    keyword: Sequence[RankedChunk],
    vector: Sequence[RankedChunk],
    options: Optional[FusionOptions] = None,
) -> List[RankedChunk]:
    options = options or FusionOptions()
    weights = resolve_weights(options)

    if options.strategy == FusionStrategy.SCORE:
        return rerank_by_score(
            keyword,
            vector,
            keyword_weight=weights.keyword_weight,
            vector_weight=weights.vector_weight,
        )

    return rerank_by_rrf(
        keyword,
        vector,
        keyword_weight=weights.keyword_weight,
        vector_weight=weights.vector_weight,
        rrf_k=options.rrf_k,
    )
