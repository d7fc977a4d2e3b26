import pytest

from conftest import items
from hybridrank.core.types import EvalQuery, QueryMetrics, RetrievalStrategy
from hybridrank.eval.ab_test import ab_test, percent_change
from hybridrank.eval.evaluator import evaluate_per_query, evaluate_retrieval
from hybridrank.eval.report import format_ab_result, format_metrics, format_table

QUERIES = [
    EvalQuery.of("q1", ["a", "b"]),
    EvalQuery.of("q2", ["c"]),
]

PERFECT = {"q1": items("a", "b"), "q2": items("c")}
MISSING = {"q1": items("x", "y"), "q2": items("z")}


def lookup(table):
    return lambda query: table.get(query, [])


def test_empty_query_set_returns_zeros_without_calling_retriever():
    calls = []

    def fn(query):
        calls.append(query)
        return []

    result = evaluate_retrieval([], fn, 5)
    assert result == QueryMetrics()
    assert calls == []


def test_evaluate_averages_across_queries():
    table = {"q1": items("a", "b"), "q2": items("z")}
    result = evaluate_retrieval(QUERIES, lookup(table), k=2)
    assert result.mrr == pytest.approx(0.5)
    assert result.hit_rate == pytest.approx(0.5)
    assert result.recall_at_k == pytest.approx(0.5)
    assert result.precision_at_k == pytest.approx(0.5)


def test_evaluate_calls_retriever_once_per_query():
    calls = []

    def fn(query):
        calls.append(query)
        return PERFECT[query]

    evaluate_retrieval(QUERIES, fn, 5)
    assert calls == ["q1", "q2"]


def test_retriever_errors_propagate():
    def broken(query):
        raise RuntimeError("search backend down")

    with pytest.raises(RuntimeError):
        evaluate_retrieval(QUERIES, broken, 5)


def test_evaluate_per_query_keeps_order():
    pairs = evaluate_per_query(QUERIES, lookup(PERFECT), 5)
    assert [q.query for q, _ in pairs] == ["q1", "q2"]
    assert all(m.mrr == 1 for _, m in pairs)


# ---- A/B ----

def test_ab_b_wins_when_only_b_finds_relevant_docs():
    result = ab_test(
        QUERIES,
        RetrievalStrategy("missing", lookup(MISSING)),
        RetrievalStrategy("perfect", lookup(PERFECT)),
        k=5,
    )
    assert result.winner == "B"
    assert result.winner_name == "perfect"
    assert result.improvement["mrr"] == "+∞%"
    assert set(result.improvement) == {"mrr", "ndcg", "precision_at_k", "recall_at_k", "f1_at_k", "hit_rate"}


def test_ab_a_wins():
    result = ab_test(
        QUERIES,
        RetrievalStrategy("perfect", lookup(PERFECT)),
        RetrievalStrategy("missing", lookup(MISSING)),
        k=5,
    )
    assert result.winner == "A"
    assert result.improvement["mrr"] == "-100.00%"


def test_ab_identical_strategies_tie():
    fn = lookup(PERFECT)
    result = ab_test(QUERIES, RetrievalStrategy("a", fn), RetrievalStrategy("b", fn), k=5)
    assert result.winner == "tie"
    assert result.winner_name == "Tie"
    assert result.improvement["mrr"] == "+0.00%"
    assert result.metrics_a == result.metrics_b


def test_ab_winner_ignores_metrics_other_than_mrr():
    # same first hit, B finds more relevant items further down
    a = {"q1": items("a", "x"), "q2": items("c")}
    b = {"q1": items("a", "b"), "q2": items("c")}
    result = ab_test(QUERIES, RetrievalStrategy("a", lookup(a)), RetrievalStrategy("b", lookup(b)), k=2)
    assert result.metrics_b.recall_at_k > result.metrics_a.recall_at_k
    assert result.winner == "tie"


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (0.5, 0.75, "+50.00%"),
        (0.8, 0.4, "-50.00%"),
        (0.3, 0.3, "+0.00%"),
        (0.0, 0.0, "+0.00%"),
        (0.0, 0.25, "+∞%"),
    ],
)
def test_percent_change(a, b, expected):
    assert percent_change(a, b) == expected


# ---- report ----

def test_format_metrics_contains_labels():
    text = format_metrics(QueryMetrics(mrr=1, ndcg=1, precision_at_k=1, recall_at_k=1, f1_at_k=1, hit_rate=1), 5)
    for label in ("MRR", "NDCG", "Precision", "Recall", "F1", "HitRate"):
        assert label in text
    assert "NDCG@5" in text
    assert "100.00%" in text


def test_format_metrics_uses_k():
    text = format_metrics(QueryMetrics(), k=3)
    assert "Precision@3" in text
    assert "0.00%" in text


def test_format_ab_result_names_winner():
    result = ab_test(
        QUERIES,
        RetrievalStrategy("Keyword", lookup(MISSING)),
        RetrievalStrategy("Hybrid-RRF", lookup(PERFECT)),
        k=5,
    )
    text = format_ab_result(result, 5)
    assert "Keyword" in text
    assert "Winner: Hybrid-RRF" in text
    assert "+∞%" in text


def test_format_table_rows_align():
    lines = format_table([["MRR", "70.00%"], ["NDCG@5", "1.00%"]], ["Metric", "Value"]).splitlines()
    assert len(lines) == 6
    assert len({len(line) for line in lines}) == 1
