"""Fixtures shared by CLI tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from novelsync.cli.client import clear_online_cache


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Keep config and cache files out of the real home directory."""
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    clear_online_cache()
    yield config_home / "novelsync"
    clear_online_cache()
