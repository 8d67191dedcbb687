"""
Core Data Models for the grocery ledger

These models are the persisted shape of the ledger. The whole
LedgerState is written as a single JSON record after every mutation.

DESIGN DECISION: Money and quantities are Decimal. Negative input is
clamped by the Ledger before it reaches these models, so the models
themselves reject negatives loudly.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from boodschappen.money import line_total, month_key


DEFAULT_STORE = "Algemeen"
ALL_STORES_FILTER = "Alle"

DEFAULT_STORES: list[str] = [
    "Algemeen",
    "Colruyt",
    "Delhaize",
    "ALDI",
    "Lidl",
    "Carrefour",
    "Action",
    "Kruidvat",
    "Andere",
]


def new_item_id() -> str:
    """Short opaque identifier (12 hex characters)."""
    return uuid4().hex[:12]


class Theme(str, Enum):
    """Colour theme of the host application."""
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"


class GroceryItem(BaseModel):
    """
    One purchased or planned entry.

    `checked` is only used by the list UI. `recurring` items survive
    week and month purges.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=new_item_id)
    name: str = Field(..., min_length=1)
    quantity: Decimal = Field(default=Decimal("1"), ge=0)
    unit_price: Decimal = Field(default=Decimal("0"), ge=0)
    store: str = Field(default=DEFAULT_STORE)
    recurring: bool = False
    checked: bool = False
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("store")
    @classmethod
    def default_empty_store(cls, v: str) -> str:
        return v or DEFAULT_STORE

    @property
    def line_total(self) -> Decimal:
        return line_total(self.quantity, self.unit_price)


class Preferences(BaseModel):
    """User settings persisted next to the items."""

    currency: str = Field(default="EUR", min_length=3, max_length=3)
    theme: Theme = Theme.SYSTEM
    stores: list[str] = Field(default_factory=lambda: list(DEFAULT_STORES))
    show_price: bool = True

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()


class LedgerState(BaseModel):
    """
    The single persisted record.

    `month_carry` holds the total of weeks already closed in `month`.
    It never includes the live basket.
    """

    items: list[GroceryItem] = Field(default_factory=list)
    month: str = Field(
        default_factory=lambda: month_key(datetime.now()),
        pattern=r"^\d{4}-\d{2}$",
    )
    month_carry: Decimal = Field(default=Decimal("0.00"), ge=0)
    # Calendar month in which `month` was picked by hand (close_month,
    # set_month). The choice holds until the calendar leaves that month.
    month_chosen_in: Optional[str] = Field(default=None, pattern=r"^\d{4}-\d{2}$")
    preferences: Preferences = Field(default_factory=Preferences)
