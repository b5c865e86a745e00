"""The Grok engine: named patterns in, named captures out.

Example:
    >>> from grokmatch import Grok
    >>>
    >>> grok = Grok()
    >>> grok.add_pattern("NUMBER", r"\\d+")
    >>> grok.parse("%{NUMBER:status} %{NUMBER:bytes}", "200 512")
    {'status': '200', 'bytes': '512'}

    >>> grok = Grok.with_defaults()
    >>> grok.parse("%{IPV4:client}", "from 10.0.0.1")
    {'client': '10.0.0.1'}

"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path

from grokmatch.catalog.loaders import read_catalog
from grokmatch.core.config import GrokConfig
from grokmatch.core.types import PatternName
from grokmatch.patterns.matcher import PatternMatcher
from grokmatch.patterns.registry import PatternRegistry
from grokmatch.patterns.types import CatalogLoadResult

logger = logging.getLogger(__name__)


def default_patterns_path() -> Path:
    """Return the directory of the bundled default catalog."""
    return Path(__file__).parent / "data" / "patterns"


@lru_cache(maxsize=1)
def _default_entries() -> tuple[tuple[PatternName, str], ...]:
    """Read and cache the bundled default catalog."""
    return tuple(read_catalog(default_patterns_path()).entries)


class Grok:
    """Registry of named patterns plus a matcher compiled against it.

    Not safe for concurrent use: compile reads the registry while replacing
    the cached regex, so concurrent callers must hold one lock around all
    calls on the same instance.
    """

    def __init__(self, config: GrokConfig | None = None) -> None:
        """Initialize an engine with no patterns.

        Args:
            config: Engine configuration; defaults to GrokConfig().

        """
        self.config = config or GrokConfig()
        self._registry = PatternRegistry(self.config)
        self._matcher = PatternMatcher(self._registry, self.config)

    @classmethod
    def with_defaults(cls, config: GrokConfig | None = None) -> Grok:
        """Create an engine pre-loaded with the bundled default patterns."""
        grok = cls(config)
        result = grok.add_patterns(_default_entries())
        logger.debug(
            "Loaded %d default patterns from %s", len(result.loaded), default_patterns_path()
        )
        return grok

    def __repr__(self) -> str:
        """Return a string representation of the engine."""
        return f"Grok(patterns={len(self._registry)}, compiled={self._matcher.source!r})"

    @property
    def patterns(self) -> Mapping[PatternName, str]:
        """Read-only view of the registered patterns."""
        return self._registry.as_mapping()

    def add_pattern(self, name: PatternName, pattern: str) -> None:
        """Register pattern under name, replacing any previous definition."""
        self._registry.register(name, pattern)

    def add_patterns(self, entries: Iterable[tuple[PatternName, str]]) -> CatalogLoadResult:
        """Bulk load (name, pattern) pairs in dependency order.

        Raises:
            CycleDetectedError: If the definitions reference each other in
                a cycle and on_cycle is RAISE.
            MissingPatternError: If catalog_on_unresolved is FAIL and a
                reference cannot be resolved.

        """
        return self._registry.load_catalog(entries)

    def add_patterns_from_path(self, path: str | Path) -> CatalogLoadResult:
        """Bulk load the catalog file or directory at path.

        Raises:
            CatalogError: If the catalog cannot be read.
            CycleDetectedError: See add_patterns.
            MissingPatternError: See add_patterns.

        """
        return self._registry.load_path(Path(path))

    def expand(self, pattern: str) -> str:
        """Return pattern with all references expanded, without compiling it."""
        return self._matcher.expand(pattern)

    def compile(self, pattern: str) -> None:
        """Compile pattern for subsequent match and captures calls.

        Capture labels become Python group names, so a label used twice in
        one expansion, or one starting with a digit (%{INT:1st}), is an
        invalid regex.

        Raises:
            MissingPatternError: If a reference cannot be resolved.
            InvalidRegexError: If the expansion is not a valid regex.

        """
        self._matcher.compile(pattern)

    def match(self, text: str) -> bool:
        """Return True if the compiled pattern matches anywhere in text."""
        return self._matcher.match(text)

    def captures(self, text: str) -> dict[str, str]:
        """Return capture label -> matched text for the compiled pattern."""
        return self._matcher.captures(text)

    def parse(self, pattern: str, text: str) -> dict[str, str]:
        """Compile pattern and return its captures on text."""
        return self._matcher.parse(pattern, text)
