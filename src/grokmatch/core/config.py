"""Configuration model for grokmatch.

This module provides the Pydantic configuration model for the engine and a
YAML loader for it. Every field has a default, so ``GrokConfig()`` gives the
historic behavior: strict compilation, lenient bulk loading.

Usage:
    from grokmatch.core.config import GrokConfig, load_config

    config = load_config(Path("grok.yaml"))
    grok = Grok(config=config)

Example YAML:
    grok:
      on_cycle: tolerate
      ignore_case: true
      match_timeout: 2.5
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from grokmatch.core.exceptions import ConfigError
from grokmatch.core.types import CycleHandling, UnresolvedPolicy

logger = logging.getLogger(__name__)

_LABEL_REGEX = re.compile(r"^[A-Za-z_]\w*$")


class GrokConfig(BaseModel):
    """Engine configuration.

    Attributes:
        compile_on_unresolved: Unresolved-reference policy for compile.
        catalog_on_unresolved: Unresolved-reference policy for bulk loading.
        on_cycle: Reaction to a dependency cycle during bulk loading.
        catalog_resolves_registered: Let bulk loading resolve names that are
            already registered, not only names from the same batch.
        whole_match_label: Label under which captures reports the whole match.
        parse_raises: Propagate compile errors from parse instead of
            swallowing them.
        match_timeout: Seconds allowed for one regex evaluation.
        ignore_case: Compile with re.IGNORECASE.
        multiline: Compile with re.MULTILINE.
        dotall: Compile with re.DOTALL.

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    compile_on_unresolved: UnresolvedPolicy = Field(
        default=UnresolvedPolicy.FAIL,
        description="Policy for unresolved references when compiling a pattern",
    )
    catalog_on_unresolved: UnresolvedPolicy = Field(
        default=UnresolvedPolicy.SUBSTITUTE_EMPTY,
        description="Policy for unresolved references when bulk loading a catalog",
    )
    on_cycle: CycleHandling = Field(
        default=CycleHandling.RAISE,
        description="Raise on dependency cycles or tolerate them",
    )
    catalog_resolves_registered: bool = Field(
        default=False,
        description="Resolve catalog references against already registered patterns",
    )
    whole_match_label: str | None = Field(
        default=None,
        description="Capture label bound to the whole match",
    )
    parse_raises: bool = Field(
        default=False,
        description="Propagate compile errors from parse",
    )
    match_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds allowed for one regex evaluation",
    )
    ignore_case: bool = False
    multiline: bool = False
    dotall: bool = False

    @field_validator("whole_match_label", mode="after")
    @classmethod
    def validate_whole_match_label(cls, v: str | None) -> str | None:
        """Reject labels that could never be produced by a capture group."""
        if v is not None and v != "" and not _LABEL_REGEX.match(v):
            raise ValueError(f"Invalid whole_match_label '{v}': expected an identifier or ''")
        return v

    @property
    def regex_flags(self) -> int:
        """Combined ``re`` flags for compile."""
        flags = 0
        if self.ignore_case:
            flags |= re.IGNORECASE
        if self.multiline:
            flags |= re.MULTILINE
        if self.dotall:
            flags |= re.DOTALL
        return flags


def load_config(path: Path) -> GrokConfig:
    """Load GrokConfig from a YAML file.

    The mapping may sit at the document root or under a ``grok`` key.
    An empty file yields the default configuration.

    Args:
        path: Path to the YAML file.

    Returns:
        Validated GrokConfig.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or
            fails validation.

    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if data is None:
        logger.debug("Empty config file: %s", path)
        return GrokConfig()

    if not isinstance(data, dict):
        raise ConfigError(
            f"Config root must be a mapping, got {type(data).__name__} in {path}"
        )

    if "grok" in data:
        data = data["grok"] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"'grok' must be a mapping in {path}")

    try:
        return GrokConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e
