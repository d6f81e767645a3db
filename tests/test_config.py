import importlib

import pytest

from local_ai_service import config


def test_unknown_catalog_validation_mode_fails_at_startup(monkeypatch):
    monkeypatch.setenv("CATALOG_VALIDATION", "strict")
    try:
        with pytest.raises(RuntimeError, match="CATALOG_VALIDATION"):
            importlib.reload(config)
    finally:
        monkeypatch.delenv("CATALOG_VALIDATION")
        importlib.reload(config)
    assert config.CATALOG_VALIDATION in config.CATALOG_VALIDATION_MODES


def test_catalog_validation_mode_is_case_insensitive(monkeypatch):
    monkeypatch.setenv("CATALOG_VALIDATION", "Reject")
    try:
        assert importlib.reload(config).CATALOG_VALIDATION == "reject"
    finally:
        monkeypatch.delenv("CATALOG_VALIDATION")
        importlib.reload(config)
