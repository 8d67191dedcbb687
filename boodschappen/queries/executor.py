"""
Totals Execution Engine

DESIGN DECISION: Totals are computed deterministically from what the
accessors return. The formatter only ever renders a TotalsResult; it
never sums anything itself.

Rounding happens per line, per sum and per derived value.
"""

from decimal import Decimal

from boodschappen.accessors import LedgerAccessors
from boodschappen.ledger import breakdown_by_store
from boodschappen.models.intent import (
    StoreTotal,
    TotalQueryIntent,
    TotalScope,
    TotalsResult,
)
from boodschappen.money import sum_amounts
from boodschappen.parsing import canonical_store


class QueryExecutionError(Exception):
    """Error during total calculation."""
    pass


class TotalsExecutor:
    """
    Executes total queries against the ledger accessors.

    GUARANTEES:
    - Reads only; never mutates the ledger
    - Store matching uses canonical names, display keeps the user's form
    """

    def __init__(self, accessors: LedgerAccessors):
        self._accessors = accessors

    def execute(self, intent: TotalQueryIntent) -> TotalsResult:
        if intent.scope == TotalScope.BY_STORE:
            return self._execute_by_store(intent)
        elif intent.scope == TotalScope.ALL_STORES_BREAKDOWN:
            return self._execute_breakdown()
        elif intent.scope == TotalScope.THIS_WEEK:
            return self._execute_week()
        elif intent.scope == TotalScope.THIS_MONTH:
            return self._execute_month()
        elif intent.scope == TotalScope.CURRENT_VIEW:
            return self._execute_current_view()
        raise QueryExecutionError(f"Unknown total scope: {intent.scope}")

    def _basket_total(self) -> Decimal:
        return sum_amounts(item.line_total for item in self._accessors.get_items())

    def _month_total(self, current: Decimal) -> Decimal:
        return sum_amounts([self._accessors.get_month_carry(), current])

    def _execute_by_store(self, intent: TotalQueryIntent) -> TotalsResult:
        if not intent.store:
            raise QueryExecutionError("Store total requested without a store")
        target = canonical_store(intent.store)
        amount = sum_amounts(
            item.line_total
            for item in self._accessors.get_items()
            if canonical_store(item.store) == target
        )
        return TotalsResult(scope=intent.scope, amount=amount, store=intent.store)

    def _execute_breakdown(self) -> TotalsResult:
        grouped = breakdown_by_store(self._accessors.get_items())
        breakdown = [
            StoreTotal(store=store, amount=amount)
            for store, amount in grouped.items()
        ]
        return TotalsResult(
            scope=TotalScope.ALL_STORES_BREAKDOWN,
            amount=sum_amounts(grouped.values()),
            breakdown=breakdown,
        )

    def _execute_week(self) -> TotalsResult:
        return TotalsResult(scope=TotalScope.THIS_WEEK, amount=self._basket_total())

    def _execute_month(self) -> TotalsResult:
        month = self._month_total(self._basket_total())
        return TotalsResult(scope=TotalScope.THIS_MONTH, amount=month, month_total=month)

    def _execute_current_view(self) -> TotalsResult:
        current = self._basket_total()
        return TotalsResult(
            scope=TotalScope.CURRENT_VIEW,
            amount=current,
            current_total=current,
            month_total=self._month_total(current),
        )
