"""Infrastructure adapters for the network bounded context.

Loads antenna catalog documents into the read-only AntennaCatalog.
"""

from .json_catalog import CatalogLoadError, JsonAntennaCatalogAdapter

__all__ = ["CatalogLoadError", "JsonAntennaCatalogAdapter"]
