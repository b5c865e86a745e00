"""Reference scanning for grok pattern text.

A reference embeds one named pattern inside another: ``%{NAME}`` or
``%{NAME:ALIAS}``, where NAME and ALIAS are runs of word characters.
Anything else between ``%{`` and ``}`` is left alone as literal text.
"""

from __future__ import annotations

import re

from grokmatch.core.types import PatternName, Reference

# %{NAME} or %{NAME:ALIAS}
REFERENCE_REGEX = re.compile(r"%\{(\w+)(?::(\w+))?\}")


def scan_references(pattern: str) -> list[Reference]:
    """Extract all references from pattern text, left to right.

    Duplicates are preserved; each occurrence gets its own span.

    Args:
        pattern: Raw pattern text.

    Returns:
        References in order of appearance.

    Examples:
        >>> [r.label for r in scan_references("%{INT:port} %{WORD}")]
        ['port', 'WORD']

    """
    return [
        Reference(name=m.group(1), alias=m.group(2), start=m.start(), end=m.end())
        for m in REFERENCE_REGEX.finditer(pattern)
    ]


def referenced_names(pattern: str) -> list[PatternName]:
    """Return the names referenced by pattern text, aliases ignored."""
    return [ref.name for ref in scan_references(pattern)]
