"""Store name extraction and canonicalisation."""

from typing import Optional


STORE_MARKERS = (" in ", " bij ", " at ")

_DISPLAY_PREFIXES = ("winkel ", "store ")
_CANONICAL_PREFIXES = ("winkel ", "store ", "supermarkt ")
_PUNCTUATION = ",.:;!?\n"


def _strip_prefixes(name: str, prefixes: tuple[str, ...]) -> str:
    for prefix in prefixes:
        if name.lower().startswith(prefix):
            name = name[len(prefix):]
    return name


def title_case(text: str) -> str:
    """'carrefour   express' -> 'Carrefour Express'"""
    return " ".join(word.capitalize() for word in text.split())


def extract_store_name(text: str) -> Optional[str]:
    """
    The store named after the last ' in ', ' bij ' or ' at '.

    A leading 'winkel '/'store ' is dropped and the result is
    title-cased. Returns None when there is no marker or nothing
    usable after it.
    """
    lower = text.lower()
    position, marker = max((lower.rfind(m), m) for m in STORE_MARKERS)
    if position < 0:
        return None

    after = lower[position + len(marker):]
    name = after.replace(".", " ").replace(",", " ").strip()
    name = _strip_prefixes(name, _DISPLAY_PREFIXES)
    name = title_case(name)
    return name or None


def canonical_store(name: str) -> str:
    """Matching key for a store: lower-case, no punctuation, no prefix."""
    out = name.lower()
    for mark in _PUNCTUATION:
        out = out.replace(mark, " ")
    out = " ".join(out.split())
    out = _strip_prefixes(out, _CANONICAL_PREFIXES)
    return out.strip()
