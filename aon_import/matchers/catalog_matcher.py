from collections.abc import Mapping
from typing import Any, Iterable, List, Optional

from loguru import logger

from aon_import.clients.base import CatalogAccess
from aon_import.config import GAME_SYSTEM
from aon_import.models import MatchDescriptor, MatchSearch, ScanFailure


def _get(entry: Any, key: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(key)
    return getattr(entry, key, None)


def _index_entries(index: Any) -> Iterable[Any]:
    """Index payloads come either as a list of entries or keyed by id."""
    if isinstance(index, Mapping):
        return list(index.values())
    if isinstance(index, (list, tuple)):
        return index
    return []


def _entry_name(entry: Any) -> str:
    name = _get(entry, "name")
    if not name:
        data = _get(entry, "data")
        name = _get(data, "name") if data is not None else None
    return str(name or "").strip()


def _entry_id(entry: Any) -> Optional[str]:
    for key in ("_id", "id", "_key"):
        value = _get(entry, key)
        if value:
            return str(value)
    return None


def _to_plain(document: Any) -> Any:
    if isinstance(document, Mapping):
        return dict(document)
    if hasattr(document, "to_dict"):
        return document.to_dict()
    return document


class CatalogMatcher:
    """
    Exact, case-insensitive name lookup across every catalog of one game system.

    Failures on a single catalog or entry are logged and recorded, never raised,
    so one broken pack cannot abort a whole import.
    """

    def __init__(self, catalog: Optional[CatalogAccess], system: str = GAME_SYSTEM):
        self.catalog = catalog
        self.system = system

    async def search(self, name: str, retrieve_document: bool = False) -> MatchSearch:
        """
        Search all catalogs of the configured system for entries named `name`.

        Args:
            name (str): Item name to look up.
            retrieve_document (bool): Fetch the full document of every match.

        Returns:
            MatchSearch: Matches in catalog then index order, plus skipped failures.
        """
        result = MatchSearch(query=str(name or "").strip())
        query = result.query.lower()
        if self.catalog is None or not query:
            return result

        try:
            catalogs = await self.catalog.list_catalogs()
        except Exception as e:
            logger.warning(f"⚠️ Could not list catalogs while searching '{result.query}': {e}")
            result.failures.append(ScanFailure(catalog=None, entry_id=None, error=str(e)))
            return result

        for info in catalogs or []:
            if _get(info, "system") != self.system:
                continue
            catalog_id = str(_get(info, "id"))
            try:
                await self._scan_catalog(catalog_id, _get(info, "label") or catalog_id, query, retrieve_document, result)
            except Exception as e:
                logger.warning(f"⚠️ Error searching catalog {catalog_id} for '{result.query}': {e}")
                result.failures.append(ScanFailure(catalog=catalog_id, entry_id=None, error=str(e)))

        logger.debug(f"🔎 '{result.query}': {len(result.matches)} matches")
        return result

    async def _scan_catalog(
        self,
        catalog_id: str,
        label: str,
        query: str,
        retrieve_document: bool,
        result: MatchSearch,
    ) -> None:
        index = await self.catalog.get_index(catalog_id)
        for entry in _index_entries(index):
            entry_name = _entry_name(entry)
            if entry_name.lower() != query:
                continue
            entry_id = _entry_id(entry)
            if not entry_id:
                continue

            document = None
            if retrieve_document:
                try:
                    document = await self.catalog.get_document(catalog_id, entry_id)
                except Exception as e:
                    logger.warning(f"⚠️ Failed to retrieve {entry_id} from {catalog_id}: {e}")
                    result.failures.append(ScanFailure(catalog=catalog_id, entry_id=entry_id, error=str(e)))
                    continue
                if document is None:
                    logger.warning(f"⚠️ Document {entry_id} missing from {catalog_id}")
                    result.failures.append(
                        ScanFailure(catalog=catalog_id, entry_id=entry_id, error="document not found")
                    )
                    continue
                document = _to_plain(document)

            result.matches.append(MatchDescriptor(
                catalog=catalog_id,
                catalog_label=label,
                id=entry_id,
                name=entry_name,
                type=str(_get(entry, "type") or ""),
                document=document,
            ))

    async def find_matches(self, name: str, retrieve_document: bool = False) -> List[MatchDescriptor]:
        """Return the catalog entries whose name equals `name`, ignoring case."""
        return (await self.search(name, retrieve_document)).matches
