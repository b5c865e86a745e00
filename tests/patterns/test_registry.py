"""Tests for PatternRegistry registration and bulk loading."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import pytest

from grokmatch.core.config import GrokConfig
from grokmatch.core.exceptions import CatalogError, CycleDetectedError, MissingPatternError
from grokmatch.core.types import CycleHandling, UnresolvedPolicy
from grokmatch.patterns.registry import PatternRegistry


class TestRegister:
    """Tests for single-pattern registration."""

    def test_register_and_get(self, registry: PatternRegistry) -> None:
        """Registered text is returned verbatim, references unexpanded."""
        registry.register("A", "%{B}x")
        assert registry.get("A") == "%{B}x"
        assert "A" in registry
        assert len(registry) == 1

    def test_get_unknown_returns_none(self, registry: PatternRegistry) -> None:
        """Unknown names are absent."""
        assert registry.get("NOPE") is None
        assert "NOPE" not in registry

    def test_names_are_case_sensitive(self, registry: PatternRegistry) -> None:
        """Names differing only in case are distinct."""
        registry.register("word", "a")
        registry.register("WORD", "b")
        assert registry.get("word") == "a"
        assert registry.get("WORD") == "b"

    def test_overwrite_replaces_and_warns(
        self, registry: PatternRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Registering an existing name replaces its text with a warning."""
        registry.register("A", "old")
        with caplog.at_level(logging.WARNING, logger="grokmatch.patterns.registry"):
            registry.register("A", "new")
        assert registry.get("A") == "new"
        assert "Overwriting existing pattern: A" in caplog.text

    def test_revision_advances_on_every_register(self, registry: PatternRegistry) -> None:
        """Each mutation bumps the revision counter."""
        start = registry.revision
        registry.register("A", "a")
        registry.register("A", "a")
        assert registry.revision == start + 2

    def test_mapping_view_is_read_only(self, registry: PatternRegistry) -> None:
        """as_mapping cannot be used to mutate the registry."""
        registry.register("A", "a")
        view = registry.as_mapping()
        with pytest.raises(TypeError):
            view["B"] = "b"  # type: ignore[index]
        assert dict(view) == {"A": "a"}


class TestLoadCatalog:
    """Tests for bulk loading in dependency order."""

    @pytest.mark.parametrize(
        "entries",
        [
            [("BASE", "[a-z]+"), ("DERIVED", "%{BASE}[0-9]")],
            [("DERIVED", "%{BASE}[0-9]"), ("BASE", "[a-z]+")],
        ],
    )
    def test_dependency_resolved_in_any_order(
        self, registry: PatternRegistry, entries: list[tuple[str, str]]
    ) -> None:
        """Definitions expand correctly regardless of declaration order."""
        result = registry.load_catalog(entries)

        derived = registry.get("DERIVED")
        assert derived == "(?P<BASE>[a-z]+)[0-9]"
        assert re.search(derived, "abc9")
        assert not re.search(derived, "9abc")
        assert result.loaded == ["BASE", "DERIVED"]
        assert result.unresolved == {}

    def test_stored_text_is_reference_free(self, registry: PatternRegistry) -> None:
        """Multi-level chains are fully expanded when stored."""
        registry.load_catalog(
            [
                ("TOP", "%{MID:m}!"),
                ("MID", "<%{LEAF}>"),
                ("LEAF", "x"),
            ]
        )
        assert registry.get("TOP") == "(?P<m><(?P<LEAF>x)>)!"
        assert "%{" not in registry.get("MID")

    def test_forward_reference_outside_batch_expands_empty(
        self, registry: PatternRegistry
    ) -> None:
        """A name not in the batch becomes an empty group and is reported."""
        result = registry.load_catalog([("A", "a%{GHOST}")])
        assert registry.get("A") == "a(?P<GHOST>)"
        assert result.unresolved == {"A": ["GHOST"]}

    def test_registered_names_not_used_by_default(self, registry: PatternRegistry) -> None:
        """Bulk loading only resolves names finalized in the same call."""
        registry.register("EXISTING", "e")
        registry.load_catalog([("A", "%{EXISTING}")])
        assert registry.get("A") == "(?P<EXISTING>)"

    def test_registered_names_used_when_configured(self) -> None:
        """catalog_resolves_registered lets the batch use prior registrations."""
        registry = PatternRegistry(GrokConfig(catalog_resolves_registered=True))
        registry.register("EXISTING", "e")
        result = registry.load_catalog([("A", "%{EXISTING}")])
        assert registry.get("A") == "(?P<EXISTING>e)"
        assert result.loaded == ["A"]

    def test_later_duplicate_wins(self, registry: PatternRegistry) -> None:
        """The last definition of a name in a batch is the one loaded."""
        registry.load_catalog([("A", "first"), ("A", "second")])
        assert registry.get("A") == "second"

    def test_cycle_raises_and_leaves_registry_untouched(
        self, registry: PatternRegistry
    ) -> None:
        """A cyclic batch raises without registering anything."""
        registry.register("KEEP", "k")
        with pytest.raises(CycleDetectedError):
            registry.load_catalog([("X", "%{Y}"), ("Y", "%{X}"), ("Z", "z")])
        assert list(registry) == ["KEEP"]

    def test_cycle_tolerated_when_configured(self) -> None:
        """With on_cycle=TOLERATE the batch loads and cyclic remnants are empty."""
        registry = PatternRegistry(GrokConfig(on_cycle=CycleHandling.TOLERATE))
        result = registry.load_catalog([("X", "%{Y}"), ("Y", "%{X}")])

        assert sorted(result.loaded) == ["X", "Y"]
        assert registry.get("Y") == "(?P<X>)"
        assert registry.get("X") == "(?P<Y>(?P<X>))"
        assert result.unresolved == {"Y": ["X"]}

    def test_fail_policy_raises_and_leaves_registry_untouched(self) -> None:
        """With catalog_on_unresolved=FAIL a missing name aborts the batch."""
        registry = PatternRegistry(GrokConfig(catalog_on_unresolved=UnresolvedPolicy.FAIL))
        with pytest.raises(MissingPatternError) as exc_info:
            registry.load_catalog([("A", "a"), ("B", "%{GHOST}")])
        assert exc_info.value.name == "GHOST"
        assert len(registry) == 0


class TestLoadPath:
    """Tests for bulk loading from catalog files."""

    def test_load_file(self, registry: PatternRegistry, write_catalog) -> None:
        """A catalog file is read, expanded and registered."""
        path = write_catalog(
            "base",
            "# numbers\nINT [0-9]+\n\nPAIR %{INT:a},%{INT:b}\n",
        )
        result = registry.load_path(path)

        assert registry.get("PAIR") == "(?P<a>[0-9]+),(?P<b>[0-9]+)"
        assert result.files_loaded == [str(path)]
        assert result.skipped == []

    def test_malformed_lines_reported(self, registry: PatternRegistry, write_catalog) -> None:
        """Malformed lines are skipped and listed in the result."""
        path = write_catalog("base", "INT [0-9]+\nLONELY\n")
        result = registry.load_path(path)

        assert result.loaded == ["INT"]
        assert len(result.skipped) == 1
        assert "LONELY" in result.skipped[0]

    def test_missing_path_raises(self, registry: PatternRegistry, tmp_path: Path) -> None:
        """A missing catalog path raises CatalogError."""
        with pytest.raises(CatalogError, match="does not exist"):
            registry.load_path(tmp_path / "nope")
