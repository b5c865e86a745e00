"""Core type definitions for grokmatch.

This module provides the small value types shared by the scanner, the
expander, the registry and the catalog loader.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

# Registry key, e.g. "NUMBER" or "IPV4". Case-sensitive.
PatternName: TypeAlias = str

# Name -> raw (possibly reference-bearing) pattern text
PatternMap: TypeAlias = dict[PatternName, str]

# Name -> referenced names, in order of appearance
DependencyGraph: TypeAlias = dict[PatternName, list[PatternName]]


class UnresolvedPolicy(str, Enum):
    """What the expander does with a reference it cannot resolve.

    - FAIL: raise MissingPatternError
    - SUBSTITUTE_EMPTY: emit the capture group with an empty body
    """

    FAIL = "fail"
    SUBSTITUTE_EMPTY = "substitute_empty"


class CycleHandling(str, Enum):
    """How bulk loading reacts to a dependency cycle.

    - RAISE: surface CycleDetectedError, registry untouched
    - TOLERATE: log, drop the back edge, keep loading
    """

    RAISE = "raise"
    TOLERATE = "tolerate"


@dataclass(frozen=True, slots=True)
class Reference:
    """A ``%{NAME}`` or ``%{NAME:ALIAS}`` token found in pattern text.

    Attributes:
        name: Name of the referenced pattern.
        alias: Optional capture label overriding the name.
        start: Offset of the opening ``%`` in the scanned text.
        end: Offset just past the closing ``}``.

    """

    name: PatternName
    alias: str | None
    start: int
    end: int

    @property
    def label(self) -> str:
        """Capture group label: the alias if given, else the name."""
        return self.alias or self.name

    @property
    def token(self) -> str:
        """Canonical source text of the reference."""
        if self.alias:
            return f"%{{{self.name}:{self.alias}}}"
        return f"%{{{self.name}}}"
