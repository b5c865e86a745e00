"""Core types, configuration and exceptions for grokmatch."""

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
from grokmatch.core.types import CycleHandling, Reference, UnresolvedPolicy

__all__ = [
    # config
    "GrokConfig",
    "load_config",
    # exceptions
    "CatalogError",
    "ConfigError",
    "CycleDetectedError",
    "GrokError",
    "InvalidRegexError",
    "MatchTimeoutError",
    "MissingPatternError",
    "NotCompiledError",
    # types
    "CycleHandling",
    "Reference",
    "UnresolvedPolicy",
]
