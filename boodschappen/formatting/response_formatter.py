"""
Response Formatter

Renders intents and totals as chat replies (Dutch). Pure functions of
their inputs: no ledger access, no sums, no side effects.
"""

from boodschappen.models.intent import (
    AddItemIntent,
    TotalScope,
    TotalsResult,
    UnrecognizedReason,
)
from boodschappen.money import format_money, line_total, pretty_quantity


NOT_READY_MESSAGE = "De chat is nog niet klaar om te gebruiken."

EMPTY_INPUT_MESSAGE = (
    "Zeg wat je wil doen, bijvoorbeeld: ‘totaal deze week’, "
    "‘totaal in winkel Aldi’ of ‘voeg toe 2 appels voor 10 euro in Aldi’."
)

ADD_SYNTAX_HELP = "\n".join([
    "Ik kon je toevoeg-opdracht niet goed lezen. Probeer bv:",
    "• voeg toe 2 appels voor 10 euro in Aldi",
    "• voeg toe 2 appels voor elk 5 euro in Colruyt",
])

STORE_MISSING_MESSAGE = "Zeg bv.: ‘totaal in Aldi’ of ‘totaal bij Colruyt’."

GENERIC_HELP = "\n".join([
    "Dat heb ik niet goed begrepen. Je kan vragen:",
    "• totaal deze week",
    "• totaal deze maand",
    "• totaal in winkel Aldi",
    "• totaal per winkel",
    "Of voeg iets toe:",
    "• voeg toe 2 appels voor 10 euro in Aldi",
    "• voeg toe 2 appels voor elk 5 euro in Colruyt",
])

EMPTY_LIST_MESSAGE = "Je lijst is nog leeg."

ERROR_MESSAGE = "Er ging iets mis bij het verwerken van je opdracht. Probeer het opnieuw."


class ResponseFormatter:
    """Turns results into reply text."""

    _UNRECOGNIZED_REPLIES = {
        UnrecognizedReason.EMPTY_INPUT: EMPTY_INPUT_MESSAGE,
        UnrecognizedReason.ADD_SYNTAX_INVALID: ADD_SYNTAX_HELP,
        UnrecognizedReason.STORE_NAME_MISSING: STORE_MISSING_MESSAGE,
        UnrecognizedReason.GENERIC: GENERIC_HELP,
    }

    def not_ready(self) -> str:
        return NOT_READY_MESSAGE

    def error(self) -> str:
        return ERROR_MESSAGE

    def unrecognized(self, reason: UnrecognizedReason) -> str:
        return self._UNRECOGNIZED_REPLIES.get(reason, GENERIC_HELP)

    def item_added(self, intent: AddItemIntent, symbol: str, code: str) -> str:
        total = line_total(intent.quantity, intent.unit_price)
        return "\n".join([
            f"Toegevoegd: {pretty_quantity(intent.quantity)} × {intent.name} in {intent.store}.",
            f"Prijs/stuk: {format_money(intent.unit_price, symbol, code)} "
            f"• Totaal: {format_money(total, symbol, code)}.",
        ])

    def totals(self, result: TotalsResult, symbol: str, code: str) -> str:
        def money(amount):
            return format_money(amount, symbol, code)

        if result.scope == TotalScope.BY_STORE:
            return f"Totaal in {result.store}: {money(result.amount)}."

        if result.scope == TotalScope.ALL_STORES_BREAKDOWN:
            if result.is_empty:
                return EMPTY_LIST_MESSAGE
            lines = ["Totalen per winkel:"]
            lines.extend(f"• {entry.store}: {money(entry.amount)}" for entry in result.breakdown)
            return "\n".join(lines)

        if result.scope == TotalScope.THIS_WEEK:
            return f"Totaal deze week: {money(result.amount)}."

        if result.scope == TotalScope.THIS_MONTH:
            return f"Totaal deze maand: {money(result.amount)} (inclusief reeds geboekte weken)."

        return "\n".join([
            f"Huidig totaal (zicht): {money(result.current_total)}",
            f"Totaal deze maand: {money(result.month_total)}",
        ])
