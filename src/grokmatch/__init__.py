"""grokmatch - named, composable regular expression patterns."""

from importlib.metadata import version

from grokmatch.core.config import GrokConfig, load_config
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
from grokmatch.core.types import CycleHandling, UnresolvedPolicy
from grokmatch.grok import Grok, default_patterns_path
from grokmatch.patterns.types import CatalogLoadResult

try:
    __version__ = version("grokmatch")
except Exception:
    __version__ = "0.0.0-dev"

__all__ = [
    "CatalogError",
    "CatalogLoadResult",
    "ConfigError",
    "CycleDetectedError",
    "CycleHandling",
    "Grok",
    "GrokConfig",
    "GrokError",
    "InvalidRegexError",
    "MatchTimeoutError",
    "MissingPatternError",
    "NotCompiledError",
    "UnresolvedPolicy",
    "default_patterns_path",
    "load_config",
]
