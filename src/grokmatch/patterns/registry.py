"""Pattern registry for grokmatch.

This module provides the PatternRegistry class, which owns the mapping from
pattern name to pattern text. Patterns are added one at a time or in bulk
from a catalog; bulk loading expands every definition in dependency order
so the stored text of a catalog pattern no longer contains references.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from grokmatch.catalog.loaders import read_catalog
from grokmatch.core.config import GrokConfig
from grokmatch.core.types import CycleHandling, PatternMap, PatternName
from grokmatch.patterns.expander import expand
from grokmatch.patterns.graph import build_dependency_graph, sort_graph
from grokmatch.patterns.types import CatalogLoadResult

logger = logging.getLogger(__name__)


class PatternRegistry:
    """Named patterns available for reference expansion.

    Attributes:
        _patterns: Pattern name -> pattern text.
        _revision: Incremented on every mutation; lets a matcher tell
            whether its cached compile still reflects the registry.

    """

    def __init__(self, config: GrokConfig | None = None) -> None:
        """Initialize an empty registry."""
        self._config = config or GrokConfig()
        self._patterns: PatternMap = {}
        self._revision = 0

    def __len__(self) -> int:
        """Return the number of registered patterns."""
        return len(self._patterns)

    def __contains__(self, name: object) -> bool:
        """Return True if name is registered."""
        return name in self._patterns

    def __iter__(self) -> Iterator[PatternName]:
        """Iterate over registered names in registration order."""
        return iter(self._patterns)

    def __repr__(self) -> str:
        """Return a string representation of the registry."""
        return f"PatternRegistry(patterns={len(self._patterns)})"

    @property
    def revision(self) -> int:
        """Mutation counter."""
        return self._revision

    def get(self, name: PatternName) -> str | None:
        """Return the pattern text registered under name, or None."""
        return self._patterns.get(name)

    def as_mapping(self) -> Mapping[PatternName, str]:
        """Read-only live view of the registered patterns."""
        return MappingProxyType(self._patterns)

    def register(self, name: PatternName, raw: str) -> None:
        """Register raw pattern text under name, replacing any previous text.

        The text is stored as given; references in it are expanded when a
        pattern using it is compiled.
        """
        previous = self._patterns.get(name)
        if previous is not None and previous != raw:
            logger.warning("Overwriting existing pattern: %s", name)

        self._patterns[name] = raw
        self._revision += 1

    def load_catalog(self, entries: Iterable[tuple[PatternName, str]]) -> CatalogLoadResult:
        """Bulk load raw definitions, expanding them in dependency order.

        Definitions may reference each other in any declaration order. Each
        one is expanded against the definitions already finalized in this
        call (plus the registry, if catalog_resolves_registered is set);
        what cannot be resolved is handled per catalog_on_unresolved.
        Nothing is registered unless the whole batch expands.

        Args:
            entries: (name, raw pattern text) pairs; a later pair with the
                same name wins.

        Returns:
            CatalogLoadResult with registered and unresolved names.

        Raises:
            CycleDetectedError: If definitions reference each other in a
                cycle and on_cycle is RAISE.
            MissingPatternError: If a reference is unresolved and
                catalog_on_unresolved is FAIL.

        """
        definitions: PatternMap = {}
        for name, raw in entries:
            if name in definitions:
                logger.debug("Catalog redefines pattern '%s', later definition wins", name)
            definitions[name] = raw

        graph = build_dependency_graph(definitions.items())
        order = sort_graph(
            graph,
            tolerate_cycles=self._config.on_cycle is CycleHandling.TOLERATE,
        )
        order.reverse()

        finalized: PatternMap = (
            dict(self._patterns) if self._config.catalog_resolves_registered else {}
        )
        result = CatalogLoadResult()
        for name in order:
            missing: list[PatternName] = []
            finalized[name] = expand(
                definitions[name],
                finalized,
                on_unresolved=self._config.catalog_on_unresolved,
                unresolved=missing,
            )
            if missing:
                result.unresolved[name] = missing
            logger.debug("Expanded pattern %s", name)

        for name in order:
            self.register(name, finalized[name])
            result.loaded.append(name)

        logger.info(
            "Loaded %d patterns from catalog (%d with unresolved references)",
            len(result.loaded),
            len(result.unresolved),
        )
        return result

    def load_path(self, path: Path) -> CatalogLoadResult:
        """Bulk load the catalog file or directory at path.

        Malformed lines are skipped and reported in the result.

        Raises:
            CatalogError: If the catalog cannot be read.
            CycleDetectedError: See load_catalog.
            MissingPatternError: See load_catalog.

        """
        source = read_catalog(Path(path))
        result = self.load_catalog(source.entries)
        result.skipped = list(source.skipped)
        result.files_loaded = list(source.files_loaded)
        return result
