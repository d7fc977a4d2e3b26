import pytest

from hybridrank.retrieval.weights import compute_adaptive_weights, count_tokens, has_cjk


def test_medium_english_query_uses_defaults():
    w = compute_adaptive_weights("user authentication login feature password reset")
    assert w.keyword_weight == pytest.approx(0.3)
    assert w.vector_weight == pytest.approx(0.7)


@pytest.mark.parametrize("query", ["login", "user login", "reset user password"])
def test_short_query_balances_weights(query):
    w = compute_adaptive_weights(query)
    assert w.keyword_weight == pytest.approx(0.5)
    assert w.vector_weight == pytest.approx(0.5)


def test_long_query_favors_vector():
    query = "how to implement user authentication with JWT tokens in a Nuxt 3 application using TypeScript"
    assert count_tokens(query) == 15
    w = compute_adaptive_weights(query)
    assert w.keyword_weight == pytest.approx(0.2)
    assert w.vector_weight == pytest.approx(0.8)


@pytest.mark.parametrize("query", ["登录", "用户登录", "ログイン", "로그인"])
def test_short_cjk_query_gets_keyword_bonus(query):
    w = compute_adaptive_weights(query)
    assert w.keyword_weight == pytest.approx(0.6)
    assert w.vector_weight == pytest.approx(0.4)


def test_medium_cjk_query_adds_bonus_to_default():
    query = "如何在 Nuxt 3 项目中使用 TypeScript 实现基于 JWT 的用户身份认证和权限管理系统"
    w = compute_adaptive_weights(query)
    assert w.keyword_weight == pytest.approx(0.4)
    assert w.keyword_weight <= 0.6


def test_long_cjk_query():
    w = compute_adaptive_weights(" ".join(["词"] * 16))
    assert w.keyword_weight == pytest.approx(0.3)
    assert w.vector_weight == pytest.approx(0.7)


def test_empty_query_counts_as_one_token():
    assert count_tokens("") == 1
    assert count_tokens("   ") == 1
    w = compute_adaptive_weights("")
    assert w.keyword_weight == pytest.approx(0.5)


@pytest.mark.parametrize(
    "query",
    [
        "",
        "login",
        "user authentication login feature password reset",
        "one two three four five six seven eight nine ten eleven twelve thirteen fourteen fifteen",
        "登录",
        "JWT 认证",
    ],
)
def test_weights_always_sum_to_one(query):
    w = compute_adaptive_weights(query)
    assert w.keyword_weight + w.vector_weight == pytest.approx(1.0)


def test_has_cjk():
    assert has_cjk("pgvector 索引")
    assert not has_cjk("pgvector index ivfflat")
