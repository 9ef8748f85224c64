import re
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence

import numpy as np

from aon_import.models import NormalizedRecord

NAME_ALIASES = ["name", "Name", "item_name", "title"]
TYPE_ALIASES = ["type", "Type", "item_type"]
DESCRIPTION_ALIASES = ["description", "Description", "desc", "text"]
SOURCE_ALIASES = ["source", "Source"]
QUANTITY_ALIASES = ["quantity", "qty", "Quantity"]
COUNT_ALIASES = ["count"]
PRICE_ALIASES = ["price", "Price", "cost", "Cost"]
LEVEL_ALIASES = ["level", "Level", "item_level"]
BULK_ALIASES = ["bulk", "Bulk", "weight", "Weight"]
TRAIT_ALIASES = ["traits", "Traits", "tags", "Categories", "category"]

TRAIT_SEPARATORS = re.compile(r"[,;|/]+")
LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")
LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _is_nan(value: Any) -> bool:
    return isinstance(value, (float, np.floating)) and bool(np.isnan(value))


def _as_text(value: Any) -> str:
    """Render a scalar as text; integral floats lose their trailing '.0'."""
    if value is None or _is_nan(value):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return str(int(value))
    return str(value)


def _is_blank(value: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return _as_text(value).strip() == ""


def _get_field(record: Mapping, names: Sequence[str]) -> Any:
    """
    Resolve a field through its alias list.

    Exact keys are tried first and must carry a non-blank value. Failing that,
    record keys are compared case-insensitively and the first hit is returned
    as-is, blank or not.
    """
    for n in names:
        if n in record and not _is_blank(record[n]):
            return record[n]

    lowered = [n.lower() for n in names]
    for key in record:
        if str(key).lower() in lowered:
            return record[key]
    return None


def _text_field(record: Mapping, names: Sequence[str]) -> str:
    return _as_text(_get_field(record, names))


def _parse_leading_int(value: Any) -> Optional[int]:
    match = LEADING_INT.match(_as_text(value))
    return int(match.group(1)) if match else None


def _parse_quantity(record: Mapping) -> int:
    raw = _get_field(record, QUANTITY_ALIASES)
    if not raw or _is_nan(raw):
        raw = _get_field(record, COUNT_ALIASES)
    if not raw or _is_nan(raw):
        return 1
    qty = _parse_leading_int(raw)
    if not qty or qty < 1:
        return 1
    return qty


def parse_price(value: Any) -> Optional[float]:
    """
    Parse a price such as "12 gp", "1,234.50" or "12,5".

    When both ',' and '.' appear, commas are thousands separators. A lone ','
    is a decimal separator. Returns None when no number can be read.
    """
    if _is_blank(value):
        return None
    p = re.sub(r"[^0-9.,-]", "", _as_text(value).strip())
    if "," in p and "." in p:
        p = p.replace(",", "")
    elif "," in p:
        p = p.replace(",", ".")
    match = LEADING_FLOAT.match(p)
    return float(match.group(1)) if match else None


def parse_level(value: Any) -> Optional[int]:
    """Parse an item level such as "Level 5"; None when no digits remain."""
    if _is_blank(value):
        return None
    return _parse_leading_int(re.sub(r"[^0-9-]", "", _as_text(value)))


def parse_traits(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [t for t in (_as_text(v).strip() for v in value) if t]
    if isinstance(value, str):
        return [t.strip() for t in TRAIT_SEPARATORS.split(value) if t.strip()]
    return []


def normalize_record(record: Any) -> Optional[NormalizedRecord]:
    """
    Convert one export record with arbitrary keys into a NormalizedRecord.

    Args:
        record: Mapping from a CSV row or a decoded JSON object.

    Returns:
        Optional[NormalizedRecord]: None when `record` is not a mapping.
    """
    if not isinstance(record, Mapping):
        return None

    return NormalizedRecord(
        name=_text_field(record, NAME_ALIASES),
        type=_text_field(record, TYPE_ALIASES),
        description=_text_field(record, DESCRIPTION_ALIASES),
        source=_text_field(record, SOURCE_ALIASES),
        quantity=_parse_quantity(record),
        price=parse_price(_get_field(record, PRICE_ALIASES)),
        level=parse_level(_get_field(record, LEVEL_ALIASES)),
        bulk=_text_field(record, BULK_ALIASES),
        traits=parse_traits(_get_field(record, TRAIT_ALIASES)),
        raw=record,
    )
