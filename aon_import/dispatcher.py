"""
Input format detection for AoN exports.

Routes raw text or already-decoded values to the CSV parser or JSON shape rules,
then normalizes every record. Entries that fail to normalize come back as None;
callers that need clean records filter them out.
"""
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, List, Optional, Union

from loguru import logger

from aon_import.csv_parser import parse_csv
from aon_import.models import NormalizedRecord
from aon_import.normalizer import normalize_record


class InvalidJSONError(ValueError):
    """Raised when input that looks like JSON cannot be decoded."""


def _decode_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidJSONError(f"Invalid JSON provided to parse_input: {e}") from e


def parse_json(value: Any) -> List[Optional[NormalizedRecord]]:
    """
    Normalize a JSON export.

    Accepts a list of records, an object with an `items` list, or any other
    object treated as a map of records (its values are normalized).

    Raises:
        InvalidJSONError: If `value` is a string that is not valid JSON.
    """
    if isinstance(value, str):
        value = _decode_json(value)

    if isinstance(value, list):
        return [normalize_record(item) for item in value]
    if isinstance(value, Mapping):
        items = value.get("items")
        if isinstance(items, list):
            return [normalize_record(item) for item in items]
        return [normalize_record(item) for item in value.values()]
    return []


def parse_input(data: Any) -> List[Optional[NormalizedRecord]]:
    """
    Detect the input format and normalize every record in it.

    Args:
        data: CSV or JSON text, a list of raw records, or a decoded JSON object.

    Returns:
        List[Optional[NormalizedRecord]]: One entry per input record, None for
                                          records that are not objects.

    Raises:
        InvalidJSONError: If text starting with '{' or '[' fails to decode.
    """
    if data is None:
        return []
    if isinstance(data, str):
        text = data.strip()
        if text.startswith("{") or text.startswith("["):
            return parse_json(_decode_json(text))
        return [normalize_record(row) for row in parse_csv(text)]
    if isinstance(data, (list, tuple)):
        return [normalize_record(item) for item in data]
    if isinstance(data, Mapping):
        return parse_json(data)
    return []


def parse_file(path: Union[str, Path]) -> List[Optional[NormalizedRecord]]:
    """
    Read an AoN export file (CSV or JSON) and normalize its records.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        InvalidJSONError: If a JSON export is malformed.
    """
    path = Path(path).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(f"Export file not found: {path}")

    # utf-8-sig drops the BOM spreadsheet tools put in front of CSV exports
    text = path.read_text(encoding="utf-8-sig")
    records = parse_input(text)
    logger.debug(f"📄 Parsed {len(records)} records from {path.name}")
    return records
