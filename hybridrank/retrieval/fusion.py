from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Sequence

import structlog

from hybridrank.core.types import (
    DEFAULT_KEYWORD_WEIGHT,
    DEFAULT_RRF_K,
    DEFAULT_VECTOR_WEIGHT,
    RankedChunk,
)

logger = structlog.get_logger(__name__)


def _rrf_contribution(rank: int, k: int) -> float:
    # rank is 0-based. Higher rank number => smaller contribution
    return 1.0 / (k + rank + 1)


def _first_seen(keyword: Sequence[RankedChunk], vector: Sequence[RankedChunk]) -> Dict[str, RankedChunk]:
    # id -> source record, keyword list wins when an id is in both
    chunks: Dict[str, RankedChunk] = {}
    for chunk in keyword:
        chunks.setdefault(chunk.id, chunk)
    for chunk in vector:
        chunks.setdefault(chunk.id, chunk)
    return chunks


def _ranked(chunks: Dict[str, RankedChunk], scores: Dict[str, float]) -> List[RankedChunk]:
    fused = [replace(chunk, similarity=scores[cid]) for cid, chunk in chunks.items()]
    fused.sort(key=lambda c: c.similarity, reverse=True)
    return fused


def rerank_by_rrf(
    keyword: Sequence[RankedChunk],
    vector: Sequence[RankedChunk],
    keyword_weight: float = DEFAULT_KEYWORD_WEIGHT,
    vector_weight: float = DEFAULT_VECTOR_WEIGHT,
    rrf_k: int = DEFAULT_RRF_K,
) -> List[RankedChunk]:
    """
    Merge keyword + vector result lists using weighted Reciprocal Rank Fusion.

    RRF(d) = wk/(k+rank_keyword(d)+1) + wv/(k+rank_vector(d)+1)

    Only rank order matters, so the two engines' score scales never need to
    agree. An id found by both engines collects both terms.
    """
    chunks = _first_seen(keyword, vector)
    scores: Dict[str, float] = {cid: 0.0 for cid in chunks}

    for rank, chunk in enumerate(keyword):
        scores[chunk.id] += keyword_weight * _rrf_contribution(rank, rrf_k)
    for rank, chunk in enumerate(vector):
        scores[chunk.id] += vector_weight * _rrf_contribution(rank, rrf_k)

    fused = _ranked(chunks, scores)
    logger.debug(
        "rrf fusion completed",
        keyword_count=len(keyword),
        vector_count=len(vector),
        fused_count=len(fused),
        rrf_k=rrf_k,
    )
    return fused


def normalize_scores(chunks: Sequence[RankedChunk]) -> Dict[str, float]:
    """Min-max normalize similarities into [0, 1]; a flat list maps to 1.0."""
    if not chunks:
        return {}
    values = [c.similarity for c in chunks]
    lo, hi = min(values), max(values)
    span = hi - lo
    if span == 0:
        return {c.id: 1.0 for c in chunks}
    return {c.id: (c.similarity - lo) / span for c in chunks}


def rerank_by_score(
    keyword: Sequence[RankedChunk],
    vector: Sequence[RankedChunk],
    keyword_weight: float = DEFAULT_KEYWORD_WEIGHT,
    vector_weight: float = DEFAULT_VECTOR_WEIGHT,
) -> List[RankedChunk]:
    """
    Linear blend of per-list normalized scores.

    score(d) = wk * norm_keyword(d) + wv * norm_vector(d)

    Sensitive to each engine's score distribution; use it when both engines
    produce calibrated scores, otherwise prefer RRF.
    """
    keyword_norm = normalize_scores(keyword)
    vector_norm = normalize_scores(vector)

    chunks = _first_seen(keyword, vector)
    scores = {
        cid: keyword_weight * keyword_norm.get(cid, 0.0) + vector_weight * vector_norm.get(cid, 0.0)
        for cid in chunks
    }

    fused = _ranked(chunks, scores)
    logger.debug(
        "score fusion completed",
        keyword_count=len(keyword),
        vector_count=len(vector),
        fused_count=len(fused),
    )
    return fused
