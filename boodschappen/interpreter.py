"""
Chat Interpreter

Flow for one message:
1. Guard: accessors configured? text not empty?
2. Parse text -> Intent
3. Execute the intent against the ledger accessors
   (at most one mutation: adding an item)
4. Format the reply

CRITICAL: respond() never raises. Every failure ends as a reply the
user can act on; the user corrects and resends, nothing is retried.
"""

from typing import Optional

from boodschappen.accessors import CallbackAccessors, LedgerAccessors
from boodschappen.audit import AuditLogger, create_correlation_id
from boodschappen.formatting import ResponseFormatter
from boodschappen.models.intent import (
    AddItemIntent,
    Intent,
    TotalQueryIntent,
    UnrecognizedIntent,
    UnrecognizedReason,
)
from boodschappen.parsing import CommandParser
from boodschappen.queries import TotalsExecutor


class GroceryChatInterpreter:
    """
    Answers chat messages about the grocery ledger.

    Construct once in the host and share it; it holds no state besides
    the accessors, the parser and the formatter.
    """

    def __init__(
        self,
        accessors: Optional[LedgerAccessors] = None,
        parser: Optional[CommandParser] = None,
        formatter: Optional[ResponseFormatter] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._accessors = accessors
        self._parser = parser or CommandParser()
        self._formatter = formatter or ResponseFormatter()
        self._audit_logger = audit_logger

    @property
    def is_ready(self) -> bool:
        return self._accessors is not None

    def configure(self, accessors: Optional[LedgerAccessors]) -> None:
        """Install (or remove, with None) the ledger accessors."""
        self._accessors = accessors

    def respond(self, raw_text: str) -> str:
        """Process one user message and return the reply."""
        accessors = self._accessors
        if accessors is None:
            return self._formatter.not_ready()

        correlation_id = create_correlation_id()
        intent: Optional[Intent] = None

        try:
            rule, intent = self._parser.dispatch(raw_text)

            if isinstance(intent, UnrecognizedIntent):
                if self._audit_logger:
                    self._audit_logger.log_command_rejected(
                        intent.reason.value, correlation_id, rule=rule
                    )
                return self._formatter.unrecognized(intent.reason)

            if self._audit_logger:
                self._audit_logger.log_command_received(intent.kind, correlation_id, rule=rule)

            symbol = accessors.currency_symbol()
            code = accessors.currency_code()

            if isinstance(intent, AddItemIntent):
                accessors.add_item(intent.name, intent.quantity, intent.unit_price, intent.store)
                return self._formatter.item_added(intent, symbol, code)

            if isinstance(intent, TotalQueryIntent):
                result = TotalsExecutor(accessors).execute(intent)
                if self._audit_logger:
                    self._audit_logger.log_total_queried(
                        intent.scope.value, result.amount, correlation_id
                    )
                return self._formatter.totals(result, symbol, code)

        except Exception as e:
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"intent": intent.kind if intent else None},
                    correlation_id=correlation_id,
                )
            return self._formatter.error()

        return self._formatter.unrecognized(UnrecognizedReason.GENERIC)


__all__ = ["CallbackAccessors", "GroceryChatInterpreter", "LedgerAccessors"]
