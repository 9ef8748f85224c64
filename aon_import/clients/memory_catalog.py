from typing import Any, Dict, List, Mapping, Optional, Sequence

from aon_import.models import CatalogInfo


class InMemoryCatalog:
    """
    Catalog held entirely in memory.

    `packs` maps a CatalogInfo to the documents it contains. Each document needs
    an `_id` (or `id`), a `name` and a `type`.
    """

    def __init__(self, packs: Optional[Mapping[CatalogInfo, Sequence[Mapping[str, Any]]]] = None):
        self._infos: List[CatalogInfo] = []
        self._documents: Dict[str, List[Dict[str, Any]]] = {}
        for info, docs in (packs or {}).items():
            self.add_pack(info, docs)

    def add_pack(self, info: CatalogInfo, documents: Sequence[Mapping[str, Any]]) -> None:
        self._infos.append(info)
        self._documents[info.id] = [dict(doc) for doc in documents]

    async def list_catalogs(self) -> List[CatalogInfo]:
        return list(self._infos)

    async def get_index(self, catalog_id: str) -> List[Dict[str, Any]]:
        if catalog_id not in self._documents:
            raise KeyError(f"Unknown catalog: {catalog_id}")
        return [
            {"_id": doc.get("_id") or doc.get("id"), "name": doc.get("name"), "type": doc.get("type")}
            for doc in self._documents[catalog_id]
        ]

    async def get_document(self, catalog_id: str, entry_id: str) -> Optional[Dict[str, Any]]:
        for doc in self._documents.get(catalog_id, []):
            if (doc.get("_id") or doc.get("id")) == entry_id:
                return dict(doc)
        return None
