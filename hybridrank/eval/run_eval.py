from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

import pandas as pd
from dotenv import load_dotenv

from hybridrank.core.config import settings
from hybridrank.core.logging import configure_logging
from hybridrank.core.types import DEFAULT_RRF_K, METRIC_NAMES, ABTestResult, FusionStrategy, RetrievalStrategy
from hybridrank.eval.ab_test import ab_test
from hybridrank.eval.benchmark import (
    hybrid_retriever,
    keyword_retriever,
    load_golden,
    vector_retriever,
)
from hybridrank.eval.evaluator import evaluate_per_query, evaluate_retrieval
from hybridrank.eval.report import format_ab_result, format_table, metric_labels, pct
from hybridrank.eval.schemas import GoldenCase


@dataclass
class EvalReport:
    metrics: pd.DataFrame           # one row per strategy, one column per metric
    ab_results: List[ABTestResult]
    strategies: List[RetrievalStrategy]


def build_strategies(cases: Sequence[GoldenCase], rrf_k: int) -> List[RetrievalStrategy]:
    return [
        RetrievalStrategy("Keyword", keyword_retriever(cases)),
        RetrievalStrategy("Vector", vector_retriever(cases)),
        RetrievalStrategy("Hybrid-RRF", hybrid_retriever(cases, FusionStrategy.RRF, rrf_k)),
        RetrievalStrategy("Hybrid-Score", hybrid_retriever(cases, FusionStrategy.SCORE, rrf_k)),
    ]


def run_evaluation(cases: Sequence[GoldenCase], k: int = 5, rrf_k: int = DEFAULT_RRF_K) -> EvalReport:
    queries = [c.to_eval_query() for c in cases]
    strategies = build_strategies(cases, rrf_k)
    by_name = {s.name: s for s in strategies}

    rows = []
    for s in strategies:
        row = {"strategy": s.name, "k": k}
        row.update(evaluate_retrieval(queries, s.fn, k).as_dict())
        rows.append(row)
    df = pd.DataFrame(rows)

    ab_results = [
        ab_test(queries, by_name["Keyword"], by_name["Hybrid-RRF"], k),
        ab_test(queries, by_name["Hybrid-RRF"], by_name["Hybrid-Score"], k),
    ]
    return EvalReport(metrics=df, ab_results=ab_results, strategies=strategies)


def render_report(report: EvalReport, cases: Sequence[GoldenCase], k: int) -> str:
    df = report.metrics.set_index("strategy")
    rows = [
        [label] + [pct(float(df.loc[name, col])) for name in df.index]
        for label, col in zip(metric_labels(k), METRIC_NAMES)
    ]

    parts = [
        "Retrieval Evaluation Report",
        f"Dataset: {len(cases)} queries | K={k}",
        format_table(rows, ["Metric"] + list(df.index)),
    ]
    for ab in report.ab_results:
        parts.append(f"\nA/B: {ab.name_a} vs {ab.name_b}")
        parts.append(format_ab_result(ab, k))

    hybrid = next(s for s in report.strategies if s.name == "Hybrid-RRF")
    parts.append("\nPer-query hits (Hybrid-RRF)")
    per_query = evaluate_per_query([c.to_eval_query() for c in cases], hybrid.fn, k)
    for i, (q, m) in enumerate(per_query, start=1):
        hits = round(m.recall_at_k * len(q.relevant_ids))
        parts.append(f"[Q{i}] {q.query[:40].ljust(40)} | hits {hits}/{len(q.relevant_ids)}")
    return "\n".join(parts)


def main(golden_path: Optional[str] = None, out_path: Optional[str] = None) -> EvalReport:
    load_dotenv()
    configure_logging(settings.log_level, settings.log_format)

    k = settings.eval_k
    cases = load_golden(golden_path or settings.golden_path)
    report = run_evaluation(cases, k=k, rrf_k=settings.rrf_k)

    print("\n=== RETRIEVAL RESULTS ===")
    print(render_report(report, cases, k))

    out_csv = Path(out_path or settings.eval_results_path)
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    report.metrics.to_csv(out_csv, index=False)
    print("\n✅ Saved:", out_csv)
    return report


if __name__ == "__main__":
    main()
