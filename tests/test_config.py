"""Tests for environment-backed settings."""

import importlib
import logging

from clinical_validation import config
from clinical_validation.config import env_int


def test_env_int(monkeypatch):
    monkeypatch.setenv("CDS_TEST_INT", "85")
    assert env_int("CDS_TEST_INT", 70) == 85

    monkeypatch.setenv("CDS_TEST_INT", " ")
    assert env_int("CDS_TEST_INT", 70) == 70

    monkeypatch.delenv("CDS_TEST_INT")
    assert env_int("CDS_TEST_INT", 70) == 70
    print("✓ Integer settings parsed")


def test_env_int_malformed_value(monkeypatch, caplog):
    monkeypatch.setenv("CDS_TEST_INT", "seventy")

    with caplog.at_level(logging.WARNING):
        assert env_int("CDS_TEST_INT", 70) == 70

    assert "CDS_TEST_INT" in caplog.text
    print("✓ Malformed value logs the variable name")


def test_malformed_review_threshold_at_import(monkeypatch, caplog):
    monkeypatch.setenv("CDS_REVIEW_THRESHOLD", "7O")

    try:
        with caplog.at_level(logging.WARNING):
            reloaded = importlib.reload(config)
        assert reloaded.Config.REVIEW_THRESHOLD == 70
        assert "CDS_REVIEW_THRESHOLD" in caplog.text
    finally:
        monkeypatch.delenv("CDS_REVIEW_THRESHOLD")
        importlib.reload(config)
