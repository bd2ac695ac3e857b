# This project was developed with assistance from AI tools.
"""Tests for settings defaults and env overrides."""

from homerates.core.config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.DEFAULT_MONTHLY_INS == 100
    assert s.DEFAULT_MONTHLY_HOA == 0
    assert s.MIN_PARSE_CONFIDENCE == 0.65
    assert s.CASH_FLOW_ESCALATION_PCT == 0
    assert s.KNOWLEDGE_PATH.name == "knowledge.yaml"
    assert s.KNOWLEDGE_PATH.exists()


def test_env_override(monkeypatch):
    monkeypatch.setenv("DEFAULT_MONTHLY_INS", "125")
    monkeypatch.setenv("CASH_FLOW_ESCALATION_PCT", "2.5")
    s = Settings(_env_file=None)
    assert s.DEFAULT_MONTHLY_INS == 125
    assert s.CASH_FLOW_ESCALATION_PCT == 2.5
