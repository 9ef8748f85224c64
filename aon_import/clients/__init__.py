"""Catalog access backends consumed by the matcher."""
from aon_import.clients.base import CatalogAccess
from aon_import.clients.catalog_client import CatalogClient
from aon_import.clients.local_catalog import LocalPackCatalog
from aon_import.clients.memory_catalog import InMemoryCatalog

__all__ = ["CatalogAccess", "CatalogClient", "LocalPackCatalog", "InMemoryCatalog"]
