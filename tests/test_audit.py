"""Tests for audit logging of ledger and chat events."""

import logging
from datetime import datetime
from decimal import Decimal

import pytest

from boodschappen.accessors import CallbackAccessors
from boodschappen.audit import AuditLogger, create_correlation_id
from boodschappen.interpreter import GroceryChatInterpreter
from boodschappen.ledger import Ledger
from boodschappen.models.audit import AuditEventBuilder, AuditEventType, AuditSeverity
from boodschappen.orchestrator import LedgerHandlers


class RecordingAuditLogger(AuditLogger):
    """Keeps events instead of writing them."""

    def __init__(self):
        super().__init__()
        self.events = []

    def log(self, event):
        self.events.append(event)
        return True

    @property
    def types(self):
        return [e.event_type for e in self.events]


@pytest.fixture
def audit():
    return RecordingAuditLogger()


class TestLedgerAuditing:

    def test_mutations_are_logged(self, clock, audit):
        ledger = Ledger(clock=clock, audit_logger=audit)
        item = ledger.add_item("melk", 1, "1.00")
        ledger.remove_item(item.id)
        ledger.close_week()
        ledger.close_month()
        ledger.clear_month()

        assert audit.types == [
            AuditEventType.ITEM_ADDED,
            AuditEventType.ITEM_REMOVED,
            AuditEventType.WEEK_CLOSED,
            AuditEventType.MONTH_CLOSED,
            AuditEventType.MONTH_CLEARED,
        ]

    def test_rollover_is_logged_with_purge_count(self, clock, audit):
        ledger = Ledger(clock=clock, audit_logger=audit)
        ledger.add_item("melk", 1, "1.00")
        clock.now = datetime(2026, 11, 1)
        ledger.ensure_current_month()

        event = audit.events[-1]
        assert event.event_type == AuditEventType.MONTH_ROLLED_OVER
        assert event.details == {"previous_month": "2026-10", "month": "2026-11", "purged_items": 1}


class TestChatAuditing:

    def test_command_and_total_share_correlation_id(self, ledger, audit):
        interpreter = GroceryChatInterpreter(accessors=LedgerHandlers(ledger), audit_logger=audit)
        interpreter.respond("totaal deze week")

        received, queried = audit.events
        assert received.event_type == AuditEventType.COMMAND_RECEIVED
        assert queried.event_type == AuditEventType.TOTAL_QUERIED
        assert received.correlation_id == queried.correlation_id
        assert received.details == {"intent": "total_query", "rule": "week_total"}

    def test_rejected_command(self, ledger, audit):
        interpreter = GroceryChatInterpreter(accessors=LedgerHandlers(ledger), audit_logger=audit)
        interpreter.respond("voeg toe appels")

        [event] = audit.events
        assert event.event_type == AuditEventType.COMMAND_REJECTED
        assert event.severity == AuditSeverity.WARNING
        assert event.details["reason"] == "add_syntax_invalid"
        assert event.details["rule"] == "add_item"

    def test_unmatched_command_names_no_rule(self, ledger, audit):
        interpreter = GroceryChatInterpreter(accessors=LedgerHandlers(ledger), audit_logger=audit)
        interpreter.respond("hallo daar")

        [event] = audit.events
        assert event.details == {"reason": "generic", "rule": None}

    def test_failure_is_logged_as_error(self, audit):
        def broken():
            raise RuntimeError("boom")

        interpreter = GroceryChatInterpreter(
            accessors=CallbackAccessors(broken, lambda *a: None, lambda: Decimal("0")),
            audit_logger=audit,
        )
        interpreter.respond("totaal")

        assert audit.types[-1] == AuditEventType.SYSTEM_ERROR
        assert audit.events[-1].error_message == "boom"


class TestAuditLogger:

    def test_events_reach_stdlib_logging(self, caplog):
        caplog.set_level(logging.INFO, logger="boodschappen.audit")
        AuditLogger().log_item_added("abc123", "appels", "Aldi", Decimal("10.00"))
        assert any('"event_type": "item_added"' in r.getMessage() for r in caplog.records)

    def test_log_never_raises(self):
        class Broken:
            def info(self, *args, **kwargs):
                raise RuntimeError("handler gone")

        logger = AuditLogger()
        logger._logger = Broken()
        assert logger.log(AuditEventBuilder.item_removed("abc123")) is False

    def test_correlation_ids_are_unique(self):
        assert create_correlation_id() != create_correlation_id()
