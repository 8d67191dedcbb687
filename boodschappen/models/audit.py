"""
Audit Models

Every ledger mutation and every chat command produces an audit event.
Events are written as structured log lines; they are never edited.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Ledger mutations
    ITEM_ADDED = "item_added"
    ITEM_UPDATED = "item_updated"
    ITEM_REMOVED = "item_removed"
    WEEK_CLOSED = "week_closed"
    MONTH_CLOSED = "month_closed"
    MONTH_CLEARED = "month_cleared"
    MONTH_ROLLED_OVER = "month_rolled_over"

    # Chat commands
    COMMAND_RECEIVED = "command_received"
    COMMAND_REJECTED = "command_rejected"
    TOTAL_QUERIED = "total_queried"

    # Persistence
    STATE_SAVED = "state_saved"
    STORAGE_ERROR = "storage_error"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(default_factory=datetime.now)

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What entity is this about? ("item", "ledger", "command")
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None

    # Ties together all events of one chat call
    correlation_id: Optional[UUID] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.item_added(item_id, name, store, total)
        event = AuditEventBuilder.week_closed(week_total, month_carry)
    """

    @staticmethod
    def item_added(
        item_id: str,
        name: str,
        store: str,
        amount: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ITEM_ADDED,
            entity_type="item",
            entity_id=item_id,
            correlation_id=correlation_id,
            description=f"Item added: {name} in {store}",
            details={"name": name, "store": store, "line_total": str(amount)},
            is_user_action=True,
        )

    @staticmethod
    def item_updated(item_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ITEM_UPDATED,
            entity_type="item",
            entity_id=item_id,
            description="Item updated",
            is_user_action=True,
        )

    @staticmethod
    def item_removed(item_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ITEM_REMOVED,
            entity_type="item",
            entity_id=item_id,
            description="Item removed",
            is_user_action=True,
        )

    @staticmethod
    def week_closed(week_total: Decimal, month_carry: Decimal) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WEEK_CLOSED,
            entity_type="ledger",
            description=f"Week closed: {week_total} folded into month",
            details={"week_total": str(week_total), "month_carry": str(month_carry)},
            is_user_action=True,
        )

    @staticmethod
    def month_closed(previous_month: str, new_month: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MONTH_CLOSED,
            entity_type="ledger",
            description=f"Month closed: {previous_month} -> {new_month}",
            details={"previous_month": previous_month, "month": new_month},
            is_user_action=True,
        )

    @staticmethod
    def month_cleared(month: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MONTH_CLEARED,
            entity_type="ledger",
            description=f"Month cleared: {month}",
            details={"month": month},
            is_user_action=True,
        )

    @staticmethod
    def month_rolled_over(
        previous_month: str,
        new_month: str,
        purged_items: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MONTH_ROLLED_OVER,
            entity_type="ledger",
            description=f"Calendar month changed: {previous_month} -> {new_month}",
            details={
                "previous_month": previous_month,
                "month": new_month,
                "purged_items": purged_items,
            },
        )

    @staticmethod
    def command_received(
        intent_kind: str,
        correlation_id: UUID,
        rule: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_RECEIVED,
            entity_type="command",
            correlation_id=correlation_id,
            description=f"Chat command parsed as {intent_kind}",
            details={"intent": intent_kind, "rule": rule},
            is_user_action=True,
        )

    @staticmethod
    def command_rejected(
        reason: str,
        correlation_id: UUID,
        rule: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="command",
            correlation_id=correlation_id,
            description=f"Chat command rejected: {reason}",
            details={"reason": reason, "rule": rule},
            is_user_action=True,
        )

    @staticmethod
    def total_queried(
        scope: str,
        amount: Decimal,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TOTAL_QUERIED,
            entity_type="command",
            correlation_id=correlation_id,
            description=f"Total queried: {scope}",
            details={"scope": scope, "amount": str(amount)},
        )

    @staticmethod
    def state_saved(item_count: int, month: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_SAVED,
            severity=AuditSeverity.DEBUG,
            entity_type="ledger",
            description=f"Ledger state saved ({item_count} items)",
            details={"item_count": item_count, "month": month},
        )

    @staticmethod
    def storage_error(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            description="Ledger state could not be saved",
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
