from __future__ import annotations

import pytest

from config import reset_config


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    """Every test starts from default configuration, unaffected by the caller's environment."""
    for var in ("CHECKERS_MANDATORY", "CHECKERS_ALLOW_UNDO", "CHECKERS_LOG_LEVEL", "CHECKERS_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()
