"""Pytest configuration and fixtures for grokmatch tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from grokmatch import Grok, GrokConfig
from grokmatch.patterns.registry import PatternRegistry


@pytest.fixture
def grok() -> Grok:
    """Create an empty engine with the default configuration."""
    return Grok()


@pytest.fixture
def registry() -> PatternRegistry:
    """Create an empty registry with the default configuration."""
    return PatternRegistry(GrokConfig())


@pytest.fixture
def write_catalog(tmp_path: Path) -> Callable[..., Path]:
    """Write a catalog file under tmp_path.

    Usage:
        def test_something(write_catalog):
            path = write_catalog("base", "INT [0-9]+\\n")
    """

    def _write(name: str, content: str, directory: Path | None = None) -> Path:
        target_dir = directory or tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
