import os
import asyncio
import csv
import sys
from typing import Optional
from loguru import logger

from aon_import.config import (
    BATCH_SIZE,
    CATALOG_BACKEND,
    CATALOG_MANIFEST,
    INPUT_FILE,
    LOG_LEVEL,
    OUTPUT_CSV,
    RETRIEVE_DOCUMENTS,
)
from aon_import.clients import CatalogAccess, CatalogClient, LocalPackCatalog
from aon_import.dispatcher import parse_file
from aon_import.matchers.catalog_matcher import CatalogMatcher
from aon_import.matchers.match_compiler import MatchSession


def build_catalog(backend: str) -> Optional[CatalogAccess]:
    """
    Create the catalog backend named in the configuration.

    Returns None when no backend is configured; matching then yields no results.
    """
    if backend == "http":
        return CatalogClient()
    if backend == "local":
        return LocalPackCatalog(CATALOG_MANIFEST)
    if backend:
        logger.warning(f"Unknown CATALOG_BACKEND '{backend}', matching without a catalog")
    return None


def write_matches(path: str, session: MatchSession) -> None:
    """Write one row per item name with the ids of its catalog matches."""
    if os.path.exists(path):
        os.remove(path)
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["Name", "matchCount", "catalogs", "ids"])
        for name, matches in session.matches.items():
            writer.writerow([
                name,
                len(matches),
                ";".join(m.catalog for m in matches),
                ";".join(m.id for m in matches),
            ])


async def main():
    """
    Run a full import.

    - Parses the AoN export named by INPUT_FILE.
    - Matches every item name against the configured catalog backend.
    - Writes the match table to OUTPUT_CSV.
    """
    # Initialize logs
    logger.remove()  # Remove default handler
    logger.add(sys.stderr, level=LOG_LEVEL, format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>")

    catalog = build_catalog(CATALOG_BACKEND)
    session = MatchSession(CatalogMatcher(catalog), batch_size=BATCH_SIZE)

    try:
        session.last_parsed = parse_file(INPUT_FILE)
        await session.compile(retrieve_document=RETRIEVE_DOCUMENTS)
        write_matches(OUTPUT_CSV, session)

        for failure in session.failures:
            logger.info(f"Skipped {failure.catalog or 'catalog list'} {failure.entry_id or ''}: {failure.error}")
        logger.info(f"Wrote {len(session.matches)} rows to {OUTPUT_CSV}")
    finally:
        # Cleanup: close the HTTP session to prevent unclosed connector warnings
        if isinstance(catalog, CatalogClient):
            await catalog.close()

if __name__ == "__main__":
    asyncio.run(main())
