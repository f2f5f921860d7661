"""
Shared pytest fixtures for tasklist tests.
"""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def isolate_tasklist_files(tmp_path, monkeypatch) -> None:
    """
    Ensure tests do not read the real settings file or task list.

    Parameters
    ----------
    tmp_path : pathlib.Path
        Temporary path provided by pytest.
    monkeypatch : pytest.MonkeyPatch
        Monkeypatch fixture for environment updates.
    """
    monkeypatch.setenv("TASKLIST_CONFIG_PATH", str(tmp_path / "config.toml"))
    monkeypatch.setenv("TASKLIST_PATH", str(tmp_path / "tasklist.json"))
    monkeypatch.delenv("TASKLIST_UTC_OFFSET", raising=False)
