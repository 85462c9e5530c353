"""
Database access for Catalog Search
"""
from .query import ParameterizedQuery, escape_like, contains_pattern
from .catalog_store import CatalogStore, translate_driver_error

__all__ = [
    "ParameterizedQuery",
    "escape_like",
    "contains_pattern",
    "CatalogStore",
    "translate_driver_error",
]
