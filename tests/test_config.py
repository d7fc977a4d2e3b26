import pytest
import structlog
from pydantic import ValidationError

from hybridrank.core.config import Settings
from hybridrank.core.logging import configure_logging, get_logger
from hybridrank.core.types import FusionStrategy


def test_settings_defaults():
    s = Settings()
    assert s.rrf_k == 60
    assert s.fusion_strategy is FusionStrategy.RRF
    assert s.keyword_weight is None
    assert s.vector_weight is None
    assert s.eval_k == 5


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("RRF_K", "30")
    monkeypatch.setenv("FUSION_STRATEGY", "score")
    monkeypatch.setenv("KEYWORD_WEIGHT", "0.4")
    monkeypatch.setenv("VECTOR_WEIGHT", "0.6")

    options = Settings().fusion_options(query="login")

    assert options.rrf_k == 30
    assert options.strategy is FusionStrategy.SCORE
    assert options.keyword_weight == pytest.approx(0.4)
    assert options.vector_weight == pytest.approx(0.6)
    assert options.query == "login"


def test_unknown_strategy_rejected(monkeypatch):
    monkeypatch.setenv("FUSION_STRATEGY", "bm25")
    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.parametrize("fmt", ["json", "console"])
def test_logging_configuration(fmt):
    # should not raise
    configure_logging("DEBUG", fmt, run="test")
    get_logger("hybridrank.test").info("configured", fmt=fmt)
    structlog.contextvars.clear_contextvars()
