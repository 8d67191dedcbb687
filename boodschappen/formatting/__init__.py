"""Reply formatting package."""

from boodschappen.formatting.response_formatter import (
    ADD_SYNTAX_HELP,
    EMPTY_INPUT_MESSAGE,
    EMPTY_LIST_MESSAGE,
    ERROR_MESSAGE,
    GENERIC_HELP,
    NOT_READY_MESSAGE,
    STORE_MISSING_MESSAGE,
    ResponseFormatter,
)

__all__ = [
    "ADD_SYNTAX_HELP",
    "EMPTY_INPUT_MESSAGE",
    "EMPTY_LIST_MESSAGE",
    "ERROR_MESSAGE",
    "GENERIC_HELP",
    "NOT_READY_MESSAGE",
    "STORE_MISSING_MESSAGE",
    "ResponseFormatter",
]
