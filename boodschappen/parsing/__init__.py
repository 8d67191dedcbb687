"""Chat command parsing package."""

from boodschappen.parsing.command_parser import (
    DISPATCH_RULES,
    CommandParser,
    DispatchRule,
    parse_add_command,
)
from boodschappen.parsing.numbers import NumberToken, find_price, first_number, parse_number
from boodschappen.parsing.stores import canonical_store, extract_store_name, title_case

__all__ = [
    "DISPATCH_RULES",
    "CommandParser",
    "DispatchRule",
    "NumberToken",
    "canonical_store",
    "extract_store_name",
    "find_price",
    "first_number",
    "parse_add_command",
    "parse_number",
    "title_case",
]
