"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point XDG_CONFIG_HOME at an empty temporary directory."""
    config_home = tmp_path_factory.mktemp("config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def make_vault(tmp_path: Path) -> Callable[[Mapping[str, str | bytes | None]], Path]:
    """Build a vault from a mapping of relative path to content.

    A value of None creates a directory; str or bytes creates a file.
    """

    def _make(layout: Mapping[str, str | bytes | None]) -> Path:
        root = tmp_path / "vault"
        root.mkdir(exist_ok=True)
        for relative, content in layout.items():
            target = root / relative
            if content is None:
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content)
        return root

    return _make


@pytest.fixture
def sample_vault(make_vault: Callable[[Mapping[str, str | bytes | None]], Path]) -> Path:
    """Small vault with a linked image, a stray image and an empty folder."""
    return make_vault(
        {
            "notes/a.md": "# A\n\nSee ![[img.png]] for details.\n",
            "assets/img.png": b"\x89PNG linked",
            "assets/unused.png": b"\x89PNG stray",
            "assets/empty": None,
        }
    )
