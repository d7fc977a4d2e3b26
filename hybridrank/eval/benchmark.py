"""
Built-in labeled benchmark and golden-file helpers.

Each case records what the keyword and vector engines returned for a query,
so strategies can be replayed and compared offline without a database.
Scenarios covered:
1. exact keyword lookup (keyword engine does well)
2. long semantic question (vector engine does well)
3. both engines agree
4. only the vector engine finds the answer
5. technical term exact match
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Sequence, Union

from hybridrank.core.types import DEFAULT_RRF_K, FusionOptions, FusionStrategy, RetrieverFn, ScoredItem
from hybridrank.eval.schemas import GoldenCase, ScoredHit
from hybridrank.retrieval.reranker import rerank


def _hits(*pairs) -> List[ScoredHit]:
    return [ScoredHit(id=cid, score=score) for cid, score in pairs]


BENCHMARK_CASES: List[GoldenCase] = [
    GoldenCase(
        query="JWT 认证",
        relevant_ids=["chunk-1", "chunk-2", "chunk-5"],
        keyword_results=_hits(("chunk-1", 0.9), ("chunk-2", 0.8), ("chunk-8", 0.6), ("chunk-5", 0.5), ("chunk-9", 0.3)),
        vector_results=_hits(("chunk-2", 0.88), ("chunk-11", 0.7), ("chunk-1", 0.65), ("chunk-12", 0.6), ("chunk-5", 0.55)),
    ),
    GoldenCase(
        query="如何设计一个可扩展的微服务架构来处理高并发请求并确保数据一致性",
        relevant_ids=["chunk-20", "chunk-21", "chunk-25"],
        keyword_results=_hits(("chunk-30", 0.5), ("chunk-20", 0.45), ("chunk-31", 0.4), ("chunk-32", 0.35), ("chunk-33", 0.3)),
        vector_results=_hits(("chunk-20", 0.92), ("chunk-21", 0.88), ("chunk-25", 0.80), ("chunk-34", 0.65), ("chunk-35", 0.60)),
    ),
    GoldenCase(
        query="用户权限管理",
        relevant_ids=["chunk-40", "chunk-41", "chunk-42"],
        keyword_results=_hits(("chunk-40", 0.85), ("chunk-41", 0.80), ("chunk-50", 0.65), ("chunk-42", 0.55), ("chunk-51", 0.45)),
        vector_results=_hits(("chunk-41", 0.91), ("chunk-40", 0.87), ("chunk-42", 0.83), ("chunk-52", 0.70), ("chunk-53", 0.65)),
    ),
    GoldenCase(
        query="新手引导流程",
        relevant_ids=["chunk-60", "chunk-62"],
        keyword_results=_hits(("chunk-70", 0.55), ("chunk-71", 0.48), ("chunk-72", 0.42), ("chunk-73", 0.38), ("chunk-74", 0.31)),
        vector_results=_hits(("chunk-60", 0.89), ("chunk-62", 0.84), ("chunk-75", 0.72), ("chunk-76", 0.66), ("chunk-77", 0.60)),
    ),
    GoldenCase(
        query="pgvector index ivfflat",
        relevant_ids=["chunk-80", "chunk-81"],
        keyword_results=_hits(("chunk-80", 0.95), ("chunk-81", 0.90), ("chunk-90", 0.70), ("chunk-91", 0.65), ("chunk-92", 0.60)),
        vector_results=_hits(("chunk-80", 0.88), ("chunk-93", 0.75), ("chunk-94", 0.70), ("chunk-81", 0.67), ("chunk-95", 0.63)),
    ),
]


def load_golden(path: Union[str, Path]) -> List[GoldenCase]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{path} not found. Run scripts/build_golden.py first.")
    cases: List[GoldenCase] = []
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            if line.strip():
                cases.append(GoldenCase.model_validate(json.loads(line)))
    return cases


def dump_golden(cases: Sequence[GoldenCase], path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        for case in cases:
            f.write(json.dumps(case.model_dump(), ensure_ascii=False) + "\n")
    return path


def keyword_retriever(cases: Sequence[GoldenCase]) -> RetrieverFn:
    lookup: Dict[str, List[ScoredHit]] = {c.query: c.keyword_results for c in cases}
    return lambda query: [h.to_item() for h in lookup.get(query, [])]


def vector_retriever(cases: Sequence[GoldenCase]) -> RetrieverFn:
    lookup: Dict[str, List[ScoredHit]] = {c.query: c.vector_results for c in cases}
    return lambda query: [h.to_item() for h in lookup.get(query, [])]


def hybrid_retriever(
    cases: Sequence[GoldenCase],
    strategy: FusionStrategy = FusionStrategy.RRF,
    rrf_k: int = DEFAULT_RRF_K,
) -> RetrieverFn:
    """Replay both engines' recorded lists and fuse them with adaptive weights."""
    by_query = {c.query: c for c in cases}

    def _fn(query: str) -> List[ScoredItem]:
        case = by_query.get(query)
        if case is None:
            return []
        fused = rerank(
            [h.to_chunk() for h in case.keyword_results],
            [h.to_chunk() for h in case.vector_results],
            FusionOptions(strategy=strategy, rrf_k=rrf_k, query=query),
        )
        return [c.to_scored() for c in fused]

    return _fn
