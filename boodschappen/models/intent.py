"""
Intent Models

A parsed chat command. The parser builds one of these per input line;
the interpreter consumes it once. Intents are frozen so that parsing
the same text twice yields equal values.
"""

from decimal import Decimal
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TotalScope(str, Enum):
    """What a total query sums over."""
    CURRENT_VIEW = "current_view"
    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"
    BY_STORE = "by_store"
    ALL_STORES_BREAKDOWN = "all_stores_breakdown"


class UnrecognizedReason(str, Enum):
    """Why a command could not be turned into an action."""
    GENERIC = "generic"
    EMPTY_INPUT = "empty_input"
    ADD_SYNTAX_INVALID = "add_syntax_invalid"
    STORE_NAME_MISSING = "store_name_missing"


class AddItemIntent(BaseModel):
    """'voeg toe 2 appels voor 10 euro in Aldi'"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["add_item"] = "add_item"
    name: str
    quantity: Decimal
    unit_price: Decimal
    store: str


class TotalQueryIntent(BaseModel):
    """
    A request for a total.

    `store` is the display name and is only set for BY_STORE.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["total_query"] = "total_query"
    scope: TotalScope
    store: Optional[str] = None


class UnrecognizedIntent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["unrecognized"] = "unrecognized"
    reason: UnrecognizedReason = UnrecognizedReason.GENERIC


Intent = Union[AddItemIntent, TotalQueryIntent, UnrecognizedIntent]


class StoreTotal(BaseModel):
    store: str
    amount: Decimal


class TotalsResult(BaseModel):
    """
    Result of executing a total query against the ledger accessors.

    Only the fields relevant to `scope` are filled in.
    """

    scope: TotalScope
    amount: Decimal = Field(default=Decimal("0.00"))
    store: Optional[str] = None
    breakdown: list[StoreTotal] = Field(default_factory=list)
    current_total: Optional[Decimal] = None
    month_total: Optional[Decimal] = None

    @property
    def is_empty(self) -> bool:
        """True for a breakdown over an empty basket."""
        return self.scope == TotalScope.ALL_STORES_BREAKDOWN and not self.breakdown
