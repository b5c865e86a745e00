"""Pattern-specific result types for grokmatch."""

from __future__ import annotations

from dataclasses import dataclass, field

from grokmatch.core.types import PatternName


@dataclass
class CatalogLoadResult:
    """Outcome of bulk loading a catalog into a registry.

    Attributes:
        loaded: Names registered, in dependency order.
        unresolved: Name -> referenced names that expanded to empty bodies.
        skipped: Descriptions of malformed catalog entries.
        files_loaded: Catalog files that were read (empty for in-memory loads).

    """

    loaded: list[PatternName] = field(default_factory=list)
    unresolved: dict[PatternName, list[PatternName]] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)
    files_loaded: list[str] = field(default_factory=list)

    def __repr__(self) -> str:
        """Return a string representation of the load result."""
        return (
            f"CatalogLoadResult(loaded={len(self.loaded)}, "
            f"unresolved={len(self.unresolved)}, "
            f"skipped={len(self.skipped)})"
        )
