"""Global pytest configuration."""

from __future__ import annotations

import pytest

from scamsense.analyzer.scorer import RiskScorer
from scamsense.config import ScoringConfig


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep a local .env or config/heuristics.yaml out of the tests."""
    monkeypatch.setenv("CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture
def scorer() -> RiskScorer:
    """Scorer with the canonical detector table."""
    return RiskScorer(ScoringConfig())
