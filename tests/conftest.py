"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from engram.store import Store


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path_factory, monkeypatch):
    """Keep the user's ~/.engram/config.yaml and ENGRAM_* env vars out of tests."""
    missing = tmp_path_factory.mktemp("global") / "config.yaml"
    monkeypatch.setattr("engram.config._GLOBAL_CONFIG_PATH", missing)
    monkeypatch.delenv("ENGRAM_STORE_DIR", raising=False)
    monkeypatch.delenv("ENGRAM_SEQUENCE_WIDTH", raising=False)


@pytest.fixture
def store(tmp_path: Path) -> Store:
    """Initialized store rooted at tmp_path, default layout."""
    s = Store(root=tmp_path)
    s.initialize()
    return s
