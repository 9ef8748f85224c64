"""
Catalog backed by Foundry compendium packs on disk.

A system or module manifest (system.json / module.json) lists its packs; each pack
is a NeDB `.db` file holding one JSON document per line.
"""
import copy
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np
import pandas as pd
from loguru import logger

from aon_import.models import CatalogInfo


def _drop_missing(row: Dict[str, Any]) -> Dict[str, Any]:
    """Remove cells pandas filled with NaN because the document lacks that key."""
    return {
        k: v for k, v in row.items()
        if not (isinstance(v, (float, np.floating)) and np.isnan(v))
    }


class LocalPackCatalog:
    """Reads compendium packs listed in a Foundry manifest."""

    def __init__(self, manifest_path: Union[str, Path]):
        self.manifest_path = Path(manifest_path).expanduser().resolve()
        if not self.manifest_path.exists():
            raise FileNotFoundError(f"Manifest not found: {self.manifest_path}")

        manifest = json.loads(self.manifest_path.read_text(encoding="utf-8"))
        package = manifest.get("id") or manifest.get("name") or self.manifest_path.parent.name
        # Packs in a system manifest belong to that system unless they say otherwise
        default_system = package if self.manifest_path.name == "system.json" else None

        self._paths: Dict[str, Path] = {}
        self._infos: List[CatalogInfo] = []
        for pack in manifest.get("packs", []):
            catalog_id = f"{package}.{pack.get('name')}"
            self._infos.append(CatalogInfo(
                id=catalog_id,
                label=pack.get("label") or pack.get("name") or catalog_id,
                system=pack.get("system") or default_system,
            ))
            self._paths[catalog_id] = self.manifest_path.parent / pack.get("path", "")
        self._documents: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._frames: Dict[str, pd.DataFrame] = {}

    def _load(self, catalog_id: str) -> Dict[str, Dict[str, Any]]:
        """Replay the pack file into its current documents, keyed by `_id`."""
        if catalog_id in self._documents:
            return self._documents[catalog_id]
        if catalog_id not in self._paths:
            raise KeyError(f"Unknown catalog: {catalog_id}")

        path = self._paths[catalog_id]
        documents: Dict[str, Dict[str, Any]] = {}
        with open(path, encoding="utf-8") as f:
            for line in f:
                if not line.strip():
                    continue
                doc = json.loads(line)
                doc_id = doc.get("_id")
                if not doc_id:
                    continue
                # NeDB appends updates and deletions, so the last line for an id is current
                if doc.get("$$deleted"):
                    documents.pop(doc_id, None)
                else:
                    documents[doc_id] = doc

        logger.debug(f"📦 Loaded {len(documents)} documents from {path.name}")
        self._documents[catalog_id] = documents
        return documents

    def _index_frame(self, catalog_id: str) -> pd.DataFrame:
        if catalog_id not in self._frames:
            self._frames[catalog_id] = pd.DataFrame.from_records(
                list(self._load(catalog_id).values()),
                columns=["_id", "name", "type"],
            )
        return self._frames[catalog_id]

    async def list_catalogs(self) -> List[CatalogInfo]:
        return list(self._infos)

    async def get_index(self, catalog_id: str) -> List[Dict[str, Any]]:
        df = self._index_frame(catalog_id)
        return [_drop_missing(row) for row in df.to_dict(orient="records")]

    async def get_document(self, catalog_id: str, entry_id: str) -> Optional[Dict[str, Any]]:
        doc = self._load(catalog_id).get(entry_id)
        return copy.deepcopy(doc) if doc is not None else None
