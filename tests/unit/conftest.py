"""Shared fixtures for unit tests."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point settings at an empty temp directory so user settings never leak in."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("TAX_COMPARE_CONFIG_PATH", str(config_dir))
    return config_dir
