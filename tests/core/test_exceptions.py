"""Tests for the grokmatch exception hierarchy."""

from __future__ import annotations

from pathlib import Path

import pytest

from grokmatch.core.exceptions import (
    CatalogError,
    ConfigError,
    CycleDetectedError,
    GrokError,
    InvalidRegexError,
    MatchTimeoutError,
    MissingPatternError,
    NotCompiledError,
)


class TestHierarchy:
    """Every library error derives from GrokError."""

    @pytest.mark.parametrize(
        "error_class",
        [
            CatalogError,
            ConfigError,
            CycleDetectedError,
            InvalidRegexError,
            MatchTimeoutError,
            MissingPatternError,
            NotCompiledError,
        ],
    )
    def test_inherits_from_grok_error(self, error_class: type[Exception]) -> None:
        """Each error class is a GrokError."""
        assert issubclass(error_class, GrokError)


class TestErrorContext:
    """Tests for structured error attributes."""

    def test_missing_pattern_context(self) -> None:
        """MissingPatternError carries the name and the pattern."""
        error = MissingPatternError("missing", name="INT", pattern="%{INT}")
        assert error.name == "INT"
        assert error.pattern == "%{INT}"

    def test_cycle_defaults_to_single_name(self) -> None:
        """Without an explicit cycle, the name alone is the cycle."""
        assert CycleDetectedError("cycle", name="X").cycle == ["X"]

    def test_catalog_error_str_with_location(self) -> None:
        """CatalogError renders the file and line before the message."""
        error = CatalogError("bad line", file_path=Path("pats"), line_number=3)
        assert str(error) == "pats:3: bad line"

    def test_catalog_error_str_with_file_only(self) -> None:
        """CatalogError renders the file without a line number."""
        assert str(CatalogError("unreadable", file_path=Path("pats"))) == "pats: unreadable"

    def test_catalog_error_str_plain(self) -> None:
        """CatalogError without a file is just the message."""
        assert str(CatalogError("oops")) == "oops"
