"""
Typed data models for the AoN import pipeline.
All data structures shared between parsing, normalization and matching live here.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

RawRecord = Mapping[str, Any]


@dataclass
class NormalizedRecord:
    """Fixed-shape item record produced from an arbitrary export row."""
    name: str = ""
    type: str = ""
    description: str = ""
    source: str = ""
    quantity: int = 1
    price: Optional[float] = None
    level: Optional[int] = None
    bulk: str = ""  # Raw token such as "L" or "1", no unit
    traits: List[str] = field(default_factory=list)
    raw: RawRecord = field(default_factory=dict)


@dataclass(frozen=True)
class CatalogInfo:
    """Metadata of one searchable catalog (compendium pack)."""
    id: str
    label: str
    system: Optional[str] = None  # Game-system tag, e.g. "pf2e"


@dataclass
class MatchDescriptor:
    """Catalog entry whose name matched a record name."""
    catalog: str
    catalog_label: str
    id: str
    name: str
    type: str
    document: Optional[Dict[str, Any]] = None


@dataclass
class ScanFailure:
    """A catalog or entry skipped during a search."""
    catalog: Optional[str]
    entry_id: Optional[str]
    error: str


@dataclass
class MatchSearch:
    """Outcome of a single name lookup across all catalogs."""
    query: str
    matches: List[MatchDescriptor] = field(default_factory=list)
    failures: List[ScanFailure] = field(default_factory=list)


MatchMap = Dict[str, List[MatchDescriptor]]


@dataclass
class MatchReport:
    """Compiled match map plus every failure skipped while building it."""
    matches: MatchMap = field(default_factory=dict)
    failures: List[ScanFailure] = field(default_factory=list)
