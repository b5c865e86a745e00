"""Reference expansion for grok pattern text.

Every reference is rewritten into a named capturing group whose body is
the resolved pattern text of the referenced name. Rewriting splices the
original text by span, so text introduced by a substitution is never
scanned again in the same pass.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from grokmatch.core.exceptions import MissingPatternError
from grokmatch.core.types import PatternName, UnresolvedPolicy
from grokmatch.patterns.references import scan_references

logger = logging.getLogger(__name__)


def capture_group(label: str, body: str) -> str:
    """Wrap body in a named capturing group."""
    return f"(?P<{label}>{body})"


def expand(
    raw: str,
    resolved: Mapping[PatternName, str],
    on_unresolved: UnresolvedPolicy = UnresolvedPolicy.FAIL,
    unresolved: list[PatternName] | None = None,
) -> str:
    """Expand every reference in raw against resolved pattern bodies.

    Args:
        raw: Pattern text that may contain references.
        resolved: Name -> fully expanded pattern text.
        on_unresolved: What to do when a name is not in resolved.
        unresolved: Optional list that collects names substituted with an
            empty body under SUBSTITUTE_EMPTY.

    Returns:
        The rewritten pattern text.

    Raises:
        MissingPatternError: If a name is unresolved and the policy is FAIL.

    Examples:
        >>> expand("%{A:num}", {"A": r"\\d+"})
        '(?P<num>\\\\d+)'

    """
    references = scan_references(raw)
    if not references:
        return raw

    parts: list[str] = []
    last = 0
    for ref in references:
        body = resolved.get(ref.name)
        if body is None:
            if on_unresolved is UnresolvedPolicy.FAIL:
                raise MissingPatternError(
                    f"No pattern found for %{{{ref.name}}}",
                    name=ref.name,
                    pattern=raw,
                )
            logger.warning("Unresolved reference %s, substituting empty pattern", ref.token)
            if unresolved is not None:
                unresolved.append(ref.name)
            body = ""

        parts.append(raw[last : ref.start])
        parts.append(capture_group(ref.label, body))
        last = ref.end

    parts.append(raw[last:])
    return "".join(parts)
