from __future__ import annotations
from typing import List, Optional, Protocol

import structlog

from hybridrank.core.config import Settings, settings as default_settings
from hybridrank.core.types import (
    DEFAULT_RRF_K,
    FusionOptions,
    FusionStrategy,
    RankedChunk,
    RetrieverFn,
    ScoredItem,
)
from hybridrank.retrieval.reranker import rerank

logger = structlog.get_logger(__name__)


class KeywordSearcher(Protocol):
    def search(self, query: str, top_k: int) -> List[RankedChunk]: ...


class VectorSearcher(Protocol):
    def search(self, query: str, top_k: int) -> List[RankedChunk]: ...


class HybridRetriever:
    def __init__(
        self,
        keyword: KeywordSearcher,
        vector: VectorSearcher,
        strategy: FusionStrategy = FusionStrategy.RRF,
        rrf_k: int = DEFAULT_RRF_K,
        top_k: int = 5,
        candidate_multiplier: int = 2,
        keyword_weight: Optional[float] = None,
        vector_weight: Optional[float] = None,
    ):
        self.keyword = keyword
        self.vector = vector
        self.strategy = strategy
        self.rrf_k = rrf_k
        self.top_k = top_k
        self.candidate_multiplier = candidate_multiplier
        self.keyword_weight = keyword_weight
        self.vector_weight = vector_weight

    @classmethod
    def from_settings(
        cls,
        keyword: KeywordSearcher,
        vector: VectorSearcher,
        settings: Optional[Settings] = None,
    ) -> "HybridRetriever":
        s = settings or default_settings
        return cls(
            keyword=keyword,
            vector=vector,
            strategy=s.fusion_strategy,
            rrf_k=s.rrf_k,
            top_k=s.hybrid_top_k,
            candidate_multiplier=s.candidate_multiplier,
            keyword_weight=s.keyword_weight,
            vector_weight=s.vector_weight,
        )

    def retrieve(
        self,
        query: str,
        top_k: Optional[int] = None,
        keyword_weight: Optional[float] = None,
        vector_weight: Optional[float] = None,
        strategy: Optional[FusionStrategy] = None,
    ) -> List[RankedChunk]:
        top_k = self.top_k if top_k is None else top_k
        candidates = top_k * self.candidate_multiplier

        # Over-fetch from both engines so fusion has room to reorder
        kw = self.keyword.search(query, candidates)
        vec = self.vector.search(query, candidates)

        options = FusionOptions(
            strategy=strategy or self.strategy,
            keyword_weight=self.keyword_weight if keyword_weight is None else keyword_weight,
            vector_weight=self.vector_weight if vector_weight is None else vector_weight,
            rrf_k=self.rrf_k,
            query=query,
        )
        fused = rerank(kw, vec, options)

        logger.debug(
            "hybrid retrieval",
            strategy=options.strategy.value,
            keyword_hits=len(kw),
            vector_hits=len(vec),
            fused=len(fused),
            top_k=top_k,
        )
        return fused[:top_k]

    def as_retriever_fn(self, top_k: Optional[int] = None) -> RetrieverFn:
        """Adapt to the query -> ranked ScoredItem callable the evaluator consumes."""
        def _fn(query: str) -> List[ScoredItem]:
            return [c.to_scored() for c in self.retrieve(query, top_k=top_k)]

        return _fn
