"""
Catalog access capability consumed by the matcher.
Any host environment (HTTP service, local pack files, in-memory fixtures) plugs in here.
"""
from typing import Any, List, Mapping, Optional, Protocol, Sequence, Union

from aon_import.models import CatalogInfo

CatalogIndex = Union[Sequence[Mapping[str, Any]], Mapping[str, Mapping[str, Any]]]


class CatalogAccess(Protocol):
    async def list_catalogs(self) -> List[CatalogInfo]:
        ...

    async def get_index(self, catalog_id: str) -> CatalogIndex:
        ...

    async def get_document(self, catalog_id: str, entry_id: str) -> Optional[Any]:
        ...
