"""Pattern catalog files.

This subpackage reads raw pattern definitions from a catalog file or a
directory of catalog files, for bulk loading into a PatternRegistry.

Example usage:
    >>> from grokmatch.catalog import read_catalog
    >>> catalog = read_catalog(Path("patterns/"))
    >>> registry.load_catalog(catalog.entries)

"""

from .loaders import CatalogSource, read_catalog, read_catalog_file

__all__ = [
    "CatalogSource",
    "read_catalog",
    "read_catalog_file",
]
