# fetchers/__init__.py
from .ddragon import CatalogError, fetch_catalog, fetch_versions

__all__ = ["CatalogError", "fetch_catalog", "fetch_versions"]
