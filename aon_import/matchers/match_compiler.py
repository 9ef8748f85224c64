import asyncio
from collections.abc import Sequence
from typing import Any, Iterator, List, Optional, Tuple

from loguru import logger

from aon_import.dispatcher import parse_input
from aon_import.matchers.catalog_matcher import CatalogMatcher
from aon_import.models import MatchDescriptor, MatchMap, MatchReport, NormalizedRecord, ScanFailure
from aon_import.normalizer import normalize_record


def _as_normalized(records: Any) -> List[Optional[NormalizedRecord]]:
    """Keep records that are already normalized; normalize everything else."""
    if isinstance(records, Sequence) and not isinstance(records, (str, bytes)):
        return [
            r if r is None or isinstance(r, NormalizedRecord) else normalize_record(r)
            for r in records
        ]
    return parse_input(records)


def batch_iter(names: List[str], batch_size: int) -> Iterator[Tuple[int, List[str]]]:
    """
    Yield index and name slices of size `batch_size` for batched lookups.
    """
    size = max(batch_size, 1)
    for i in range(0, len(names), size):
        yield i, names[i:i + size]


async def compile_match_report(
    records: Any,
    matcher: CatalogMatcher,
    retrieve_document: bool = False,
    batch_size: int = 1,
) -> MatchReport:
    """
    Look up every named record in the catalogs and build the match map.

    Args:
        records: Normalized records, or raw input accepted by parse_input.
        matcher (CatalogMatcher): Matcher bound to a catalog backend.
        retrieve_document (bool): Attach the full document to every match.
        batch_size (int): Lookups awaited together. 1 keeps them strictly sequential.

    Returns:
        MatchReport: Map keyed by trimmed record name, plus skipped catalog failures.
                     A name seen twice keeps the matches of the later record.
    """
    names = []
    for rec in _as_normalized(records):
        if rec is None or not rec.name:
            continue
        key = str(rec.name).strip()
        if key:
            names.append(key)

    report = MatchReport()
    for start_idx, batch in batch_iter(names, batch_size):
        logger.debug(f"Matching records {start_idx}..{start_idx + len(batch) - 1}")
        searches = await asyncio.gather(*[matcher.search(name, retrieve_document) for name in batch])
        for name, search in zip(batch, searches):
            if name in report.matches:
                logger.warning(f"Duplicate item name '{name}': keeping matches of the later record")
            report.matches[name] = search.matches
            report.failures.extend(search.failures)

    logger.info(f"✅ Compiled matches for {len(report.matches)} item names ({len(report.failures)} skipped)")
    return report


async def compile_matches(
    records: Any,
    matcher: CatalogMatcher,
    retrieve_document: bool = False,
    batch_size: int = 1,
) -> MatchMap:
    """Build the name -> matches map for `records`."""
    report = await compile_match_report(records, matcher, retrieve_document, batch_size)
    return report.matches


class MatchSession:
    """
    Holds the records and match map of one import session.

    The map is replaced wholesale by each compile() so later steps (inventory
    creation) can consume it without querying the catalogs again. Callers must
    not run compile() concurrently on the same session.
    """

    def __init__(self, matcher: CatalogMatcher, batch_size: int = 1):
        self.matcher = matcher
        self.batch_size = batch_size
        self.last_parsed: List[Optional[NormalizedRecord]] = []
        self.matches: MatchMap = {}
        self.failures: List[ScanFailure] = []

    def parse(self, data: Any) -> List[Optional[NormalizedRecord]]:
        self.last_parsed = parse_input(data)
        return self.last_parsed

    async def compile(self, records: Any = None, retrieve_document: bool = False) -> MatchMap:
        if records is None:
            records = self.last_parsed
        report = await compile_match_report(records, self.matcher, retrieve_document, self.batch_size)
        self.matches = report.matches
        self.failures = report.failures
        return self.matches

    def matched_items(self) -> List[MatchDescriptor]:
        """Every match of the current map, flattened in map order."""
        return [match for matches in self.matches.values() for match in matches]
