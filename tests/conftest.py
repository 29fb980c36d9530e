# tests/conftest.py
from __future__ import annotations

import pytest

from merchantguide import runtime


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path, monkeypatch):
    """Every test gets its own workspace and fresh runtime settings."""
    ws = tmp_path / "workspace"
    monkeypatch.setenv("MERCHANTGUIDE_HOME", str(ws))
    runtime.reset()
    yield ws
    runtime.reset()
