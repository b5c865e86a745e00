"""Pattern matcher for grokmatch.

This module provides the PatternMatcher class, which compiles grok
patterns against a PatternRegistry into Python regular expressions and
extracts named captures from text.

Only the most recently compiled pattern is kept. Compiling the same pattern
again while the registry is unchanged reuses it.
"""

from __future__ import annotations

import logging
import re
import signal
import threading

from grokmatch.core.config import GrokConfig
from grokmatch.core.exceptions import (
    GrokError,
    InvalidRegexError,
    MatchTimeoutError,
    NotCompiledError,
)
from grokmatch.patterns.expander import expand
from grokmatch.patterns.registry import PatternRegistry

logger = logging.getLogger(__name__)

# Track if SIGALRM is available (Unix only)
_SIGALRM_AVAILABLE = hasattr(signal, "SIGALRM") and hasattr(signal, "setitimer")


class _RegexTimeout(Exception):
    """Raised from the SIGALRM handler to abort a regex search."""

    pass


def _timeout_handler(signum: int, frame: object) -> None:
    """Signal handler for regex timeout."""
    raise _RegexTimeout()


def search_with_timeout(
    pattern: re.Pattern[str], text: str, timeout_seconds: float | None
) -> re.Match[str] | None:
    """Search text with pattern, aborting after timeout_seconds.

    Uses a SIGALRM interval timer, which is only possible on Unix and on the
    main thread. Elsewhere, or without a timeout, the search runs
    unprotected.

    Args:
        pattern: Compiled regex pattern.
        text: Text to search in.
        timeout_seconds: Timeout in seconds, or None.

    Returns:
        Match object if found, None otherwise.

    Raises:
        MatchTimeoutError: If the search exceeds the timeout.

    """
    if (
        timeout_seconds is None
        or not _SIGALRM_AVAILABLE
        or threading.current_thread() is not threading.main_thread()
    ):
        return pattern.search(text)

    old_handler = signal.signal(signal.SIGALRM, _timeout_handler)
    signal.setitimer(signal.ITIMER_REAL, timeout_seconds)
    try:
        return pattern.search(text)
    except _RegexTimeout:
        raise MatchTimeoutError(
            f"Regex evaluation exceeded {timeout_seconds}s",
            timeout=timeout_seconds,
        ) from None
    finally:
        signal.setitimer(signal.ITIMER_REAL, 0)
        signal.signal(signal.SIGALRM, old_handler)


class PatternMatcher:
    """Compiles grok patterns and matches them against text.

    The cache holds at most one entry: the source text of the last
    successful compile, the registry revision it was expanded against, and
    the compiled regex. A failed compile leaves it untouched.

    Example:
        >>> registry = PatternRegistry()
        >>> registry.register("NUMBER", r"\\d+")
        >>> matcher = PatternMatcher(registry)
        >>> matcher.compile("%{NUMBER:port}")
        >>> matcher.captures("port 8080")
        {'port': '8080'}

    """

    def __init__(self, registry: PatternRegistry, config: GrokConfig | None = None) -> None:
        """Initialize a matcher with nothing compiled.

        Args:
            registry: Registry used to resolve references.
            config: Engine configuration; defaults to GrokConfig().

        """
        self._registry = registry
        self._config = config or GrokConfig()
        self._source: str | None = None
        self._revision: int | None = None
        self._compiled: re.Pattern[str] | None = None

    def __repr__(self) -> str:
        """Return a string representation of the matcher."""
        return f"PatternMatcher(source={self._source!r})"

    @property
    def source(self) -> str | None:
        """Source text of the cached compile, if any."""
        return self._source

    @property
    def compiled(self) -> re.Pattern[str] | None:
        """The cached compiled regex, if any."""
        return self._compiled

    def expand(self, pattern: str) -> str:
        """Expand pattern against the registry without compiling it.

        Raises:
            MissingPatternError: If a reference is unresolved and
                compile_on_unresolved is FAIL.

        """
        return expand(
            pattern,
            self._registry.as_mapping(),
            on_unresolved=self._config.compile_on_unresolved,
        )

    def compile(self, pattern: str) -> None:
        """Compile pattern, replacing the cached regex on success.

        The expansion is not stored in the registry.

        Raises:
            MissingPatternError: If a reference cannot be resolved.
            InvalidRegexError: If the expanded text is not a valid regex.

        """
        if (
            self._compiled is not None
            and self._source == pattern
            and self._revision == self._registry.revision
        ):
            logger.debug("Compile cache hit: %s", pattern)
            return

        revision = self._registry.revision
        expanded = self.expand(pattern)
        try:
            compiled = re.compile(expanded, self._config.regex_flags)
        except re.error as e:
            raise InvalidRegexError(
                f"Invalid regex for pattern {pattern!r}: {e}",
                pattern=pattern,
                expanded=expanded,
            ) from e

        self._source = pattern
        self._revision = revision
        self._compiled = compiled
        logger.debug("Compiled pattern %r as %r", pattern, expanded)

    def _require_compiled(self) -> re.Pattern[str]:
        if self._compiled is None:
            raise NotCompiledError("No compiled pattern")
        return self._compiled

    def match(self, text: str) -> bool:
        """Return True if the compiled pattern matches anywhere in text.

        Raises:
            NotCompiledError: If nothing has been compiled.
            MatchTimeoutError: If match_timeout is exceeded.

        """
        compiled = self._require_compiled()
        return search_with_timeout(compiled, text, self._config.match_timeout) is not None

    def captures(self, text: str) -> dict[str, str]:
        """Return every capture label of the compiled pattern bound to its value.

        Labels come in group order. Groups that did not take part in the
        match, and all groups when nothing matches, are bound to ''.

        Raises:
            NotCompiledError: If nothing has been compiled.
            MatchTimeoutError: If match_timeout is exceeded.

        """
        compiled = self._require_compiled()
        match = search_with_timeout(compiled, text, self._config.match_timeout)

        captures: dict[str, str] = {}
        whole_match_label = self._config.whole_match_label
        if whole_match_label is not None:
            captures[whole_match_label] = match.group(0) if match else ""

        for label in compiled.groupindex:
            captures[label] = (match.group(label) or "") if match else ""

        return captures

    def parse(self, pattern: str, text: str) -> dict[str, str]:
        """Compile pattern, then return its captures on text.

        Compile errors are logged and swallowed, leaving the previously
        compiled pattern (if any) in use, unless parse_raises is set.

        Raises:
            NotCompiledError: If nothing is compiled after the attempt.
            GrokError: Compile errors, when parse_raises is set.

        """
        try:
            self.compile(pattern)
        except GrokError as e:
            if self._config.parse_raises:
                raise
            logger.warning("Ignoring compile error in parse for %r: %s", pattern, e)

        return self.captures(text)
