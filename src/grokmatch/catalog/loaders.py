"""Loaders for pattern catalog files and directories.

A catalog is a file, or a directory of files, holding raw pattern
definitions. Two formats are understood:

- Plain text: one ``NAME PATTERN`` definition per line, split on the first
  whitespace run. Blank lines and lines starting with ``#`` are ignored.
- YAML (``.yaml``/``.yml``): a mapping of name to pattern text, either at
  the document root or under a ``patterns`` key.

Malformed definitions are reported and skipped; read failures raise.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from grokmatch.core.exceptions import CatalogError
from grokmatch.core.types import PatternName

logger = logging.getLogger(__name__)

# Splits "NAME  PATTERN TEXT" into its two fields
FIELD_SEPARATOR = re.compile(r"\s+")

YAML_SUFFIXES = (".yaml", ".yml")


@dataclass
class CatalogSource:
    """Raw definitions read from one or more catalog files.

    Attributes:
        entries: (name, raw pattern) pairs in reading order, duplicates kept.
        files_loaded: Paths of the files that were read.
        skipped: Descriptions of definitions that were malformed.
        origins: Name -> "file:line" of the definition that wins.

    """

    entries: list[tuple[PatternName, str]] = field(default_factory=list)
    files_loaded: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    origins: dict[PatternName, str] = field(default_factory=dict)

    def add(self, name: PatternName, raw: str, origin: str) -> None:
        """Append a definition, warning when it overrides an earlier one."""
        previous = self.origins.get(name)
        if previous is not None:
            logger.warning(
                "Duplicate pattern name '%s': %s overrides previous definition from %s",
                name,
                origin,
                previous,
            )
        self.entries.append((name, raw))
        self.origins[name] = origin

    def skip(self, reason: str) -> None:
        """Record a malformed definition."""
        logger.warning("Skipping malformed catalog entry: %s", reason)
        self.skipped.append(reason)

    def merge(self, other: CatalogSource) -> None:
        """Fold the definitions of another source into this one."""
        # Duplicates inside other were already reported; take its winners only
        for name, raw in dict(other.entries).items():
            self.add(name, raw, other.origins.get(name, "unknown"))
        self.files_loaded.extend(other.files_loaded)
        self.skipped.extend(other.skipped)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise CatalogError(f"Cannot decode catalog file as UTF-8: {e}", file_path=path) from e
    except OSError as e:
        raise CatalogError(f"Cannot read catalog file: {e}", file_path=path) from e


def _parse_text_catalog(path: Path, content: str, source: CatalogSource) -> None:
    # Only the line terminator is removed; trailing whitespace belongs to the pattern
    for line_number, line in enumerate(content.splitlines(), start=1):
        if not line.strip() or line.startswith("#"):
            continue

        fields = FIELD_SEPARATOR.split(line.lstrip(), maxsplit=1)
        if len(fields) != 2 or not fields[1]:
            source.skip(f"{path}:{line_number}: expected 'NAME PATTERN', got {line.strip()!r}")
            continue

        name, raw = fields
        source.add(name, raw, f"{path}:{line_number}")


def _parse_yaml_catalog(path: Path, content: str, source: CatalogSource) -> None:
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML syntax: {e}", file_path=path) from e

    if data is None:
        logger.debug("Empty YAML catalog: %s", path)
        return

    if isinstance(data, dict) and isinstance(data.get("patterns"), dict):
        data = data["patterns"]

    if not isinstance(data, dict):
        raise CatalogError(
            f"YAML catalog root must be a mapping, got {type(data).__name__}",
            file_path=path,
        )

    for name, raw in data.items():
        if not isinstance(name, str) or not isinstance(raw, str):
            source.skip(f"{path}: pattern {name!r} must map a string name to a string pattern")
            continue
        source.add(name, raw, str(path))


def read_catalog_file(path: Path) -> CatalogSource:
    """Read the definitions of a single catalog file.

    Args:
        path: Path to a plain-text or YAML catalog file.

    Returns:
        CatalogSource holding the file's definitions.

    Raises:
        CatalogError: If the file cannot be read or decoded, or a YAML
            file has an invalid structure.

    """
    source = CatalogSource()
    content = _read_text(path)

    if path.suffix.lower() in YAML_SUFFIXES:
        _parse_yaml_catalog(path, content, source)
    else:
        _parse_text_catalog(path, content, source)

    source.files_loaded.append(str(path))
    logger.debug("Read %d pattern definitions from %s", len(source.entries), path)
    return source


def _list_catalog_files(directory: Path) -> list[Path]:
    """Regular, non-hidden files of directory, sorted by name."""
    try:
        children = list(directory.iterdir())
    except OSError as e:
        raise CatalogError(f"Cannot list catalog directory: {e}", file_path=directory) from e

    return sorted(
        (p for p in children if p.is_file() and not p.name.startswith(".")),
        key=lambda p: p.name,
    )


def read_catalog(path: Path) -> CatalogSource:
    """Read pattern definitions from a catalog file or directory.

    A directory contributes its regular files (not recursively), in name
    order. Later definitions of a name override earlier ones.

    Args:
        path: Catalog file or directory.

    Returns:
        CatalogSource with every definition read.

    Raises:
        CatalogError: If path does not exist or a file cannot be read.

    Examples:
        >>> catalog = read_catalog(Path("patterns"))
        >>> len(catalog.files_loaded)
        2

    """
    path = Path(path)
    if not path.exists():
        raise CatalogError("Catalog path does not exist", file_path=path)

    if not path.is_dir():
        return read_catalog_file(path)

    source = CatalogSource()
    files = _list_catalog_files(path)
    if not files:
        logger.warning("No catalog files found in directory: %s", path)

    for file_path in files:
        source.merge(read_catalog_file(file_path))

    logger.info(
        "Read %d pattern definitions from %d files in %s (%d skipped)",
        len(source.entries),
        len(source.files_loaded),
        path,
        len(source.skipped),
    )
    return source
