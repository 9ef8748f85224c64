import numpy as np
import pytest

from aon_import.models import NormalizedRecord
from aon_import.normalizer import normalize_record, parse_level, parse_price, parse_traits


def test_non_mapping_records_are_absent():
    assert normalize_record(None) is None
    assert normalize_record("Longsword") is None
    assert normalize_record(["Longsword"]) is None
    assert normalize_record(42) is None


def test_defaults_for_empty_record():
    rec = normalize_record({})
    assert rec == NormalizedRecord(raw={})
    assert rec.quantity == 1
    assert rec.price is None
    assert rec.level is None
    assert rec.traits == []


def test_exact_alias_priority():
    rec = normalize_record({"Name": "Upper", "name": "lower", "title": "Title"})
    assert rec.name == "lower"


def test_blank_exact_alias_falls_through_to_next_alias():
    rec = normalize_record({"name": "  ", "title": "Bag of Holding"})
    assert rec.name == "Bag of Holding"


def test_case_insensitive_fallback():
    rec = normalize_record({"ITEM_NAME": "Caltrops", "ITEM_TYPE": "equipment", "DESC": "Sharp"})
    assert rec.name == "Caltrops"
    assert rec.type == "equipment"
    assert rec.description == "Sharp"


def test_full_record():
    raw = {
        "Name": "Healing Potion (Minor)",
        "Type": "Consumable",
        "Description": "Restores 1d8 HP.",
        "Source": "Core Rulebook pg. 563",
        "Price": "4 gp",
        "Level": "1",
        "Bulk": "L",
        "Traits": "Consumable, Healing, Magical, Necromancy, Potion",
        "Quantity": "3",
    }
    rec = normalize_record(raw)
    assert rec.name == "Healing Potion (Minor)"
    assert rec.type == "Consumable"
    assert rec.source == "Core Rulebook pg. 563"
    assert rec.price == 4.0
    assert rec.level == 1
    assert rec.bulk == "L"
    assert rec.quantity == 3
    assert rec.traits == ["Consumable", "Healing", "Magical", "Necromancy", "Potion"]
    assert rec.raw is raw


@pytest.mark.parametrize("value,expected", [
    ("1,234.50 gp", 1234.5),
    ("12,5", 12.5),
    ("12 gp", 12.0),
    (7, 7.0),
    ("abc", None),
    ("", None),
    ("   ", None),
    (None, None),
])
def test_parse_price(value, expected):
    assert parse_price(value) == expected


def test_price_through_cost_alias():
    assert normalize_record({"cost": "3 sp"}).price == 3.0


@pytest.mark.parametrize("value,expected", [
    ("Level 5", 5),
    ("12", 12),
    (3, 3),
    (4.0, 4),
    ("-1", -1),
    ("", None),
    ("none", None),
])
def test_parse_level(value, expected):
    assert parse_level(value) == expected


@pytest.mark.parametrize("raw,expected", [
    ({}, 1),
    ({"quantity": "5"}, 5),
    ({"qty": "2 bundles"}, 2),
    ({"quantity": "0"}, 1),
    ({"quantity": "many"}, 1),
    ({"quantity": "-2"}, 1),
    ({"count": "4"}, 4),
    ({"quantity": 0, "count": 6}, 6),
])
def test_quantity(raw, expected):
    assert normalize_record(raw).quantity == expected


@pytest.mark.parametrize("value,expected", [
    ("fire, magical;rare", ["fire", "magical", "rare"]),
    ("a | b / c,,d", ["a", "b", "c", "d"]),
    ("", []),
    ("   ", []),
    ([" Uncommon ", "", "Magical"], ["Uncommon", "Magical"]),
    (5, []),
    (None, []),
])
def test_parse_traits(value, expected):
    assert parse_traits(value) == expected


def test_whitespace_only_traits_resolve_to_empty_list():
    assert normalize_record({"traits": "  "}).traits == []


def test_nan_cells_count_as_missing():
    """Rows coming from pandas carry NaN for empty cells."""
    rec = normalize_record({"name": "Rope", "price": float("nan"), "level": np.nan, "quantity": np.nan, "count": 2})
    assert rec.price is None
    assert rec.level is None
    assert rec.quantity == 2


def test_numeric_name_and_bulk_become_text():
    rec = normalize_record({"name": 101, "bulk": 1.0})
    assert rec.name == "101"
    assert rec.bulk == "1"
    assert rec.quantity == 1
