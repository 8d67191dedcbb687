"""
Streamlit Frontend for Boodschappen

The host application around the ledger: a basket list, a totals bar
with the week/month buttons, a settings sidebar and the chat assistant.

DESIGN PRINCIPLES:
1. No sums or parsing here; the ledger and interpreter do that
2. Every action goes through the Ledger, which persists it
3. The month check runs on every rerun (the "foreground" trigger)
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

import streamlit as st

from boodschappen.models.grocery import ALL_STORES_FILTER, Theme
from boodschappen.money import CURRENCY_SYMBOLS, currency_symbol, format_money, pretty_quantity
from boodschappen.orchestrator import create_app_components


st.set_page_config(
    page_title="Boodschappen",
    page_icon="🛒",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    return create_app_components()


def money(ledger, amount) -> str:
    code = ledger.state.preferences.currency
    return format_money(amount, currency_symbol(code), code)


def parse_decimal(raw: str, default: Decimal) -> Decimal:
    try:
        return Decimal(raw.replace(",", ".").strip())
    except (InvalidOperation, AttributeError):
        return default


def main():
    """Main application entry point."""
    ledger, interpreter, storage = get_components()
    ledger.ensure_current_month()

    render_sidebar(ledger, storage)

    st.title("🛒 Boodschappen")
    st.caption(f"Maand: {ledger.month_key}")

    list_tab, chat_tab = st.tabs(["Lijst", "AI-chat"])
    with list_tab:
        render_add_form(ledger)
        visible = render_item_list(ledger)
        render_totals_bar(ledger, visible)
    with chat_tab:
        render_chat(interpreter)


def render_sidebar(ledger, storage):
    """Settings: currency, prices, stores, month."""
    prefs = ledger.state.preferences
    st.sidebar.title("⚙️ Instellingen")

    codes = sorted(CURRENCY_SYMBOLS)
    currency = st.sidebar.selectbox(
        "Valuta",
        options=codes,
        index=codes.index(prefs.currency) if prefs.currency in codes else 0,
    )
    theme = st.sidebar.selectbox(
        "Thema",
        options=list(Theme),
        index=list(Theme).index(prefs.theme),
        format_func=lambda t: {"system": "Systeem (auto)", "light": "Licht", "dark": "Donker"}[t.value],
    )
    show_price = st.sidebar.toggle("Werk met prijzen", value=prefs.show_price)
    if (currency, theme, show_price) != (prefs.currency, prefs.theme, prefs.show_price):
        ledger.update_preferences(currency=currency, theme=theme, show_price=show_price)
        st.rerun()

    st.sidebar.markdown("---")
    st.sidebar.markdown("**Winkels**")
    new_store = st.sidebar.text_input("Nieuwe winkel")
    if st.sidebar.button("Winkel toevoegen") and new_store:
        ledger.add_store(new_store)
        st.rerun()
    for store in ledger.stores:
        col1, col2 = st.sidebar.columns([4, 1])
        col1.write(store)
        if store != "Algemeen" and col2.button("✕", key=f"store-{store}"):
            ledger.remove_store(store)
            st.rerun()
    if st.sidebar.button("Standaard winkels herstellen"):
        ledger.reset_stores_to_default()
        st.rerun()

    st.sidebar.markdown("---")
    picked = st.sidebar.date_input("Maand kiezen", value=date.today())
    if st.sidebar.button("Maand instellen"):
        ledger.set_month(datetime.combine(picked, datetime.min.time()), reset_items=True)
        st.rerun()
    if st.sidebar.button("Maand wissen"):
        ledger.clear_month()
        st.rerun()
    if st.sidebar.button("Alles verwijderen", type="primary"):
        storage.clear()
        ledger.purge_all()
        st.rerun()


def render_add_form(ledger):
    show_price = ledger.state.preferences.show_price
    with st.form("add-item", clear_on_submit=True):
        col1, col2, col3, col4 = st.columns([3, 1, 1, 2])
        name = col1.text_input("Item")
        qty = col2.text_input("Aantal", value="1")
        price = col3.text_input("Prijs/stuk", disabled=not show_price)
        store = col4.selectbox("Winkel", options=ledger.stores)
        recurring = st.checkbox("Vast item (blijft staan)")
        if st.form_submit_button("Toevoegen") and name.strip():
            ledger.add_item(
                name=name,
                quantity=parse_decimal(qty, Decimal("1")),
                unit_price=parse_decimal(price, Decimal("0")) if show_price else Decimal("0"),
                store=store,
                recurring=recurring,
            )
            st.rerun()


def render_item_list(ledger):
    """Show the current view and return it."""
    view = st.radio("Weergave", ["Alles", "Per winkel"], horizontal=True)
    store_filter = None
    if view == "Per winkel":
        options = [ALL_STORES_FILTER] + sorted(ledger.stores, key=str.casefold)
        store_filter = st.selectbox("Winkel", options=options)

    items = ledger.visible_items(store_filter)
    if not items:
        st.info("Je lijst is nog leeg.")
    for item in items:
        col1, col2, col3 = st.columns([1, 6, 1])
        checked = col1.checkbox("Klaar", value=item.checked, key=f"check-{item.id}", label_visibility="collapsed")
        if checked != item.checked:
            ledger.update_item(item.model_copy(update={"checked": checked}))
        label = f"**{item.name}** · {item.store} • {pretty_quantity(item.quantity)}"
        if ledger.state.preferences.show_price:
            label += f" × {money(ledger, item.unit_price)} = {money(ledger, item.line_total)}"
        if item.recurring:
            label += " 🔁"
        col2.markdown(label)
        if col3.button("🗑", key=f"remove-{item.id}"):
            ledger.remove_item(item.id)
            st.rerun()
    return items


def render_totals_bar(ledger, visible):
    st.markdown("---")
    if ledger.state.preferences.show_price:
        col1, col2, col3 = st.columns(3)
        col1.metric("Totaal (zicht)", money(ledger, ledger.total_of_view(visible)))
        col2.metric("Totaal (alle winkels)", money(ledger, ledger.total_all_stores()))
        col3.metric("Totaal deze maand", money(ledger, ledger.month_carry))

    col1, col2 = st.columns(2)
    if col1.button("Volgende week"):
        added = ledger.close_week()
        st.success(f"+{money(ledger, added)} toegevoegd aan Totaal deze maand.")
    if col2.button("Volgende maand"):
        ledger.close_month()
        st.success("Nieuwe maand gestart. Totaal deze maand is gereset.")


def render_chat(interpreter):
    st.markdown("Typ je vraag of opdracht, bv. ‘totaal deze maand’ of ‘voeg toe 2 appels voor 10 euro in Aldi’.")
    if "chat_lines" not in st.session_state:
        st.session_state.chat_lines = []

    for role, text in st.session_state.chat_lines:
        with st.chat_message(role):
            st.text(text)

    prompt = st.chat_input("Typ je vraag of opdracht…")
    if prompt:
        reply = interpreter.respond(prompt)
        st.session_state.chat_lines.append(("user", prompt))
        st.session_state.chat_lines.append(("assistant", reply))
        st.rerun()


if __name__ == "__main__":
    main()
