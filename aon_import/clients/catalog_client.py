"""
Singleton HTTP catalog client with rate limiting using aiolimiter.
"""
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from aiohttp import ClientSession, ClientTimeout
from aiolimiter import AsyncLimiter
from loguru import logger

from aon_import.config import CATALOG_API_KEY, CATALOG_URL, CONCURRENCY
from aon_import.models import CatalogInfo


class CatalogClient:
    """
    Singleton client for a catalog service exposing compendium packs over HTTP.
    Uses AsyncLimiter for rate limiting instead of semaphores.

    Endpoints:
        GET /catalogs                                -> [{id, label, system}]
        GET /catalogs/{catalog_id}/index             -> [{_id, name, type}]
        GET /catalogs/{catalog_id}/documents/{id}    -> document
    """
    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not CatalogClient._initialized:
            self.api_key = CATALOG_API_KEY
            self.base_url = CATALOG_URL.rstrip("/")
            # Allow CONCURRENCY requests per second
            self.rate_limiter = AsyncLimiter(max_rate=CONCURRENCY, time_period=1.0)
            self._session: Optional[ClientSession] = None
            CatalogClient._initialized = True

    async def _get_session(self) -> ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=ClientTimeout(total=60))
        return self._session

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def get_json(self, path: str, allow_missing: bool = False) -> Any:
        """
        Send a GET request to the catalog service and return the parsed JSON body.

        Args:
            path: Path relative to the service base URL.
            allow_missing: Return None instead of raising on a 404.

        Returns:
            Parsed JSON response.
        """
        async with self.rate_limiter:
            session = await self._get_session()
            url = f"{self.base_url}/{path.lstrip('/')}"
            try:
                async with session.get(url, headers=self._headers()) as resp:
                    if resp.status == 404 and allow_missing:
                        return None
                    if resp.status != 200:
                        detail = await resp.text()
                        raise Exception(
                            f"Catalog API error for {url}: "
                            f"Status: {resp.status}, Detail: {detail[:200]}"
                        )
                    return await resp.json()
            except Exception as e:
                logger.debug(f"⚠️ Catalog GET request failed: {e}")
                raise

    async def list_catalogs(self) -> List[CatalogInfo]:
        data = await self.get_json("catalogs")
        return [
            CatalogInfo(
                id=str(item["id"]),
                label=item.get("label") or str(item["id"]),
                system=item.get("system"),
            )
            for item in data or []
        ]

    async def get_index(self, catalog_id: str) -> List[Dict[str, Any]]:
        data = await self.get_json(f"catalogs/{quote(catalog_id, safe='')}/index")
        return data or []

    async def get_document(self, catalog_id: str, entry_id: str) -> Optional[Dict[str, Any]]:
        path = f"catalogs/{quote(catalog_id, safe='')}/documents/{quote(entry_id, safe='')}"
        return await self.get_json(path, allow_missing=True)

    async def close(self):
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
