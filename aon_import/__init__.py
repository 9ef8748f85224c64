"""Import Archives of Nethys item exports and match them against compendium catalogs."""
from aon_import.dispatcher import InvalidJSONError, parse_file, parse_input, parse_json
from aon_import.matchers.catalog_matcher import CatalogMatcher
from aon_import.matchers.match_compiler import MatchSession, compile_match_report, compile_matches
from aon_import.models import MatchDescriptor, NormalizedRecord

__all__ = [
    "CatalogMatcher",
    "InvalidJSONError",
    "MatchDescriptor",
    "MatchSession",
    "NormalizedRecord",
    "compile_match_report",
    "compile_matches",
    "parse_file",
    "parse_input",
    "parse_json",
]
