"""Ledger package."""

from boodschappen.ledger.ledger import Ledger, StateListener, breakdown_by_store

__all__ = ["Ledger", "StateListener", "breakdown_by_store"]
