from __future__ import annotations

from typing import List, Sequence

from hybridrank.core.types import ABTestResult, QueryMetrics


def pct(value: float) -> str:
    return f"{value * 100:.2f}%"


def metric_labels(k: int) -> List[str]:
    return ["MRR", f"NDCG@{k}", f"Precision@{k}", f"Recall@{k}", f"F1@{k}", f"HitRate@{k}"]


def format_metrics(metrics: QueryMetrics, k: int = 5) -> str:
    values = [
        metrics.mrr,
        metrics.ndcg,
        metrics.precision_at_k,
        metrics.recall_at_k,
        metrics.f1_at_k,
        metrics.hit_rate,
    ]
    labels = [f"{label}:" for label in metric_labels(k)]
    width = max(len(label) for label in labels) + 1
    return "\n".join(f"{label.ljust(width)}{pct(v)}" for label, v in zip(labels, values))


def format_table(rows: Sequence[Sequence[str]], headers: Sequence[str]) -> str:
    """Render a box-drawn table; column widths fit the widest cell."""
    widths = [
        max([len(h)] + [len(row[i]) if i < len(row) else 0 for row in rows]) + 2
        for i, h in enumerate(headers)
    ]

    def fmt_row(cells: Sequence[str]) -> str:
        padded = [(cells[i] if i < len(cells) else "").ljust(w) for i, w in enumerate(widths)]
        return "│ " + " │ ".join(padded) + " │"

    def fmt_sep(left: str, mid: str, right: str) -> str:
        return left + mid.join("─" * (w + 2) for w in widths) + right

    lines = [fmt_sep("┌", "┬", "┐"), fmt_row(headers), fmt_sep("├", "┼", "┤")]
    lines.extend(fmt_row(row) for row in rows)
    lines.append(fmt_sep("└", "┴", "┘"))
    return "\n".join(lines)


def format_ab_result(result: ABTestResult, k: int = 5) -> str:
    a = result.metrics_a.as_dict()
    b = result.metrics_b.as_dict()
    rows = [
        [label, pct(a[name]), pct(b[name]), result.improvement[name]]
        for label, name in zip(metric_labels(k), a)
    ]
    table = format_table(rows, ["Metric", result.name_a, result.name_b, "Change"])
    return f"{table}\nWinner: {result.winner_name}"
