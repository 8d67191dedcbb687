"""End-to-end tests: chat message in, reply out, ledger checked."""

import pytest
from decimal import Decimal

from boodschappen.interpreter import CallbackAccessors, GroceryChatInterpreter
from boodschappen.formatting.response_formatter import (
    ADD_SYNTAX_HELP,
    EMPTY_INPUT_MESSAGE,
    ERROR_MESSAGE,
    GENERIC_HELP,
    NOT_READY_MESSAGE,
    STORE_MISSING_MESSAGE,
)
from boodschappen.ledger import Ledger
from boodschappen.models.grocery import LedgerState
from boodschappen.orchestrator import LedgerHandlers
from boodschappen.parsing import CommandParser
from boodschappen.parsing.command_parser import DispatchRule


class TestAddThroughChat:

    def test_add_total_price(self, interpreter, ledger):
        reply = interpreter.respond("voeg toe 2 appels voor 10 euro in Aldi")

        assert reply.startswith("Toegevoegd: 2 × appels in Aldi.")
        assert reply.endswith("Prijs/stuk: € 5,00 • Totaal: € 10,00.")
        [item] = ledger.items
        assert (item.name, item.quantity, item.unit_price, item.store) == (
            "appels", Decimal("2"), Decimal("5.00"), "Aldi",
        )

    def test_add_price_each(self, interpreter, ledger):
        interpreter.respond("voeg toe 2 appels voor elk 1 euro in Colruyt")

        [item] = ledger.items
        assert item.unit_price == Decimal("1")
        assert item.store == "Colruyt"
        assert item.line_total == Decimal("2.00")

    def test_malformed_add_leaves_ledger_alone(self, interpreter, ledger):
        assert interpreter.respond("voeg toe appels voor 10 euro") == ADD_SYNTAX_HELP
        assert ledger.items == []

    def test_reply_uses_ledger_currency(self, interpreter, ledger):
        ledger.update_preferences(currency="USD")
        reply = interpreter.respond("voeg toe 1 kaas voor 4 euro")
        assert "Prijs/stuk: $ 4,00" in reply

    def test_long_item_name_is_added_with_its_store(self, interpreter, ledger):
        name = "a" * 201
        reply = interpreter.respond(f"voeg toe 1 {name} voor 2 euro in Nieuwewinkel")

        assert reply.startswith(f"Toegevoegd: 1 × {name} in Nieuwewinkel.")
        [item] = ledger.items
        assert item.name == name
        assert "Nieuwewinkel" in ledger.stores


class TestTotalsThroughChat:

    def test_per_store_breakdown(self, interpreter, ledger):
        ledger.add_item("kaas", 1, "6.00", "Colruyt")
        ledger.add_item("appels", 2, "3.17", "Aldi")

        assert interpreter.respond("totaal per winkel") == (
            "Totalen per winkel:\n"
            "• Aldi: € 6,34\n"
            "• Colruyt: € 6,00"
        )
        assert ledger.total_all_stores() == Decimal("12.34")

    def test_per_store_on_empty_list(self, interpreter):
        assert interpreter.respond("totaal per winkel") == "Je lijst is nog leeg."

    def test_month_includes_carry(self, clock):
        ledger = Ledger(state=LedgerState(month="2026-10", month_carry=Decimal("20.00")), clock=clock)
        ledger.add_item("brood", 1, "5.00")
        interpreter = GroceryChatInterpreter(accessors=LedgerHandlers(ledger))

        reply = interpreter.respond("totaal deze maand")

        assert reply == "Totaal deze maand: € 25,00 (inclusief reeds geboekte weken)."

    def test_week_after_close_week(self, interpreter, ledger):
        ledger.add_item("melk", 2, "1.10")
        ledger.close_week()
        ledger.add_item("brood", 1, "2.50")

        assert interpreter.respond("totaal deze week") == "Totaal deze week: € 2,50."
        assert interpreter.respond("totaal") == (
            "Huidig totaal (zicht): € 2,50\n"
            "Totaal deze maand: € 4,70"
        )

    def test_store_total(self, interpreter, ledger):
        ledger.add_item("appels", 2, "5.00", "Aldi")
        ledger.add_item("kaas", 1, "3.00", "Lidl")
        assert interpreter.respond("totaal bij winkel aldi") == "Totaal in Aldi: € 10,00."

    def test_store_missing(self, interpreter):
        assert interpreter.respond("totaal in .") == STORE_MISSING_MESSAGE


class TestGuards:

    def test_not_ready(self):
        interpreter = GroceryChatInterpreter()
        assert interpreter.is_ready is False
        assert interpreter.respond("totaal") == NOT_READY_MESSAGE
        assert interpreter.respond("") == NOT_READY_MESSAGE

    def test_configure_later(self, ledger):
        interpreter = GroceryChatInterpreter()
        interpreter.configure(LedgerHandlers(ledger))
        assert interpreter.is_ready
        assert interpreter.respond("totaal deze week") == "Totaal deze week: € 0,00."
        interpreter.configure(None)
        assert interpreter.respond("totaal") == NOT_READY_MESSAGE

    @pytest.mark.parametrize("text", ["", "   \n"])
    def test_empty_input(self, interpreter, ledger, text):
        assert interpreter.respond(text) == EMPTY_INPUT_MESSAGE
        assert ledger.items == []

    def test_generic_fallback(self, interpreter):
        assert interpreter.respond("hoe laat is het?") == GENERIC_HELP

    def test_accessor_failure_becomes_reply(self):
        def broken():
            raise RuntimeError("disk on fire")

        interpreter = GroceryChatInterpreter(
            accessors=CallbackAccessors(
                get_items=broken,
                add_item=lambda *args: None,
                get_month_carry=lambda: Decimal("0"),
            )
        )
        assert interpreter.respond("totaal") == ERROR_MESSAGE

    def test_parser_failure_becomes_reply(self, ledger):
        def broken(original, lower):
            raise RuntimeError("rule exploded")

        interpreter = GroceryChatInterpreter(
            accessors=LedgerHandlers(ledger),
            parser=CommandParser(rules=(DispatchRule("broken", lambda lower: True, broken),)),
        )
        assert interpreter.respond("totaal") == ERROR_MESSAGE
        assert ledger.items == []


class TestLargeAmounts:

    def test_huge_total_price(self, interpreter, ledger):
        reply = interpreter.respond("voeg toe 2 appels voor 1" + "0" * 29 + " euro")

        assert reply.startswith("Toegevoegd: 2 × appels in Algemeen.")
        [item] = ledger.items
        assert item.unit_price == Decimal(5 * 10**28)

    def test_huge_price_each_keeps_later_totals_working(self, interpreter, ledger):
        interpreter.respond("voeg toe 2 appels voor elk 1" + "0" * 29 + " euro")

        reply = interpreter.respond("totaal")

        assert reply.startswith("Huidig totaal (zicht): € 200" + ".000" * 9 + ",00")
        assert interpreter.respond("totaal per winkel").startswith("Totalen per winkel:")
