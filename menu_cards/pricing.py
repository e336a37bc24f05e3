"""Unit price lookup and total computation."""

from __future__ import annotations

from typing import Callable, Iterable

from menu_cards.models import SENTINEL, Addition, PriceEntry, PriceTable, SideItem


def _first_positive(table: PriceTable, predicate: Callable[[PriceEntry], bool]) -> float | None:
    for entry in table:
        if entry.price > 0 and predicate(entry):
            return entry.price
    return None


def resolve_unit_price(table: PriceTable, size: str, flavour: str) -> float:
    """
    Find the unit price for a size/flavour selection.

    Tiers, first hit wins, each scanning the table in order:
    1. exact size and flavour
    2. flavour-only entries when no size is selected
    3. size-only entries when no flavour is selected
    4. any entry with a positive price
    Returns 0 when nothing in the table is priced.
    """
    tiers: list[Callable[[PriceEntry], bool]] = [
        lambda entry: entry.size == size and entry.flavour == flavour,
    ]
    if size == SENTINEL:
        tiers.append(lambda entry: entry.size == SENTINEL and entry.flavour == flavour)
    if flavour == SENTINEL:
        tiers.append(lambda entry: entry.flavour == SENTINEL and entry.size == size)
    tiers.append(lambda entry: True)

    for predicate in tiers:
        price = _first_positive(table, predicate)
        if price is not None:
            return price
    return 0


def resolve_total(
    unit_price: float,
    selected_sides: Iterable[SideItem],
    selected_additions: Iterable[Addition],
    quantity: int,
) -> float:
    """(unit + sides + additions) * quantity, unrounded."""
    extras = sum(side.price for side in selected_sides) + sum(addition.price for addition in selected_additions)
    return (unit_price + extras) * quantity


def size_label(size: str, flavour: str) -> str:
    """Join the non-sentinel parts of a size/flavour selection for the cart."""
    parts = [part for part in (size, flavour) if part and part != SENTINEL]
    if not parts:
        return SENTINEL
    return " ".join(parts)


def format_price(amount: float) -> str:
    """Render a dollar amount, dropping a trailing .00."""
    text = f"{amount:.2f}"
    if text.endswith(".00"):
        text = text[:-3]
    return f"${text}"
