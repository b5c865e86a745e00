"""Named pattern expansion, registration and matching.

Example:
    >>> from grokmatch.patterns import PatternRegistry, PatternMatcher
    >>>
    >>> registry = PatternRegistry()
    >>> registry.load_catalog([
    ...     ("GREETING", "%{WORD:salute} world"),
    ...     ("WORD", r"\\b\\w+\\b"),
    ... ])
    >>>
    >>> matcher = PatternMatcher(registry)
    >>> matcher.compile("%{GREETING}")
    >>> matcher.captures("hi world")
    {'GREETING': 'hi world', 'salute': 'hi'}

"""

from grokmatch.patterns.expander import capture_group, expand
from grokmatch.patterns.graph import build_dependency_graph, sort_graph
from grokmatch.patterns.matcher import PatternMatcher, search_with_timeout
from grokmatch.patterns.references import REFERENCE_REGEX, referenced_names, scan_references
from grokmatch.patterns.registry import PatternRegistry
from grokmatch.patterns.types import CatalogLoadResult

__all__ = [
    "REFERENCE_REGEX",
    "CatalogLoadResult",
    "PatternMatcher",
    "PatternRegistry",
    "build_dependency_graph",
    "capture_group",
    "expand",
    "referenced_names",
    "scan_references",
    "search_with_timeout",
    "sort_graph",
]
