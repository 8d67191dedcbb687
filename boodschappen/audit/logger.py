"""
Audit Logger

Every ledger mutation and every chat command is logged as a structured
event. Logging is local only (structlog to stdout); the ledger state
itself is the durable record.

The audit logger:
- Is synchronous, like the rest of the core
- Never raises (a failing log line must not break a chat reply)
- Supports correlation IDs to tie the events of one command together
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

import structlog

from boodschappen.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging (and therefore structlog) to stderr."""
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )


class AuditLogger:
    """Central audit logging service."""

    def __init__(self, name: str = "boodschappen.audit"):
        self._logger = structlog.get_logger(name)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the log call itself failed.
        """
        log_dict = event.to_log_dict()
        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            return False
        return True

    def log_item_added(
        self,
        item_id: str,
        name: str,
        store: str,
        amount: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.item_added(
            item_id=item_id,
            name=name,
            store=store,
            amount=amount,
            correlation_id=correlation_id,
        ))

    def log_item_updated(self, item_id: str) -> None:
        self.log(AuditEventBuilder.item_updated(item_id))

    def log_item_removed(self, item_id: str) -> None:
        self.log(AuditEventBuilder.item_removed(item_id))

    def log_week_closed(self, week_total: Decimal, month_carry: Decimal) -> None:
        self.log(AuditEventBuilder.week_closed(week_total, month_carry))

    def log_month_closed(self, previous_month: str, new_month: str) -> None:
        self.log(AuditEventBuilder.month_closed(previous_month, new_month))

    def log_month_cleared(self, month: str) -> None:
        self.log(AuditEventBuilder.month_cleared(month))

    def log_month_rolled_over(
        self,
        previous_month: str,
        new_month: str,
        purged_items: int,
    ) -> None:
        self.log(AuditEventBuilder.month_rolled_over(
            previous_month=previous_month,
            new_month=new_month,
            purged_items=purged_items,
        ))

    def log_command_received(
        self,
        intent_kind: str,
        correlation_id: UUID,
        rule: Optional[str] = None,
    ) -> None:
        self.log(AuditEventBuilder.command_received(intent_kind, correlation_id, rule))

    def log_command_rejected(
        self,
        reason: str,
        correlation_id: UUID,
        rule: Optional[str] = None,
    ) -> None:
        self.log(AuditEventBuilder.command_rejected(reason, correlation_id, rule))

    def log_total_queried(
        self,
        scope: str,
        amount: Decimal,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.total_queried(scope, amount, correlation_id))

    def log_state_saved(self, item_count: int, month: str) -> None:
        self.log(AuditEventBuilder.state_saved(item_count, month))

    def log_storage_error(self, error_message: str) -> None:
        self.log(AuditEventBuilder.storage_error(error_message))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a chat call and pass it through.
    """
    return uuid4()
