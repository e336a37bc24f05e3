"""Add-to-cart validation and the cart collaborator interface."""

from __future__ import annotations

import logging
from typing import Protocol

from menu_cards.models import (
    AddToCartResult,
    Addition,
    CartEntry,
    ItemOptions,
    OpenDetailPage,
    SelectionState,
    SideItem,
    ValidationFailure,
)
from menu_cards.pricing import resolve_total, resolve_unit_price, size_label
from menu_cards.selection import find_missing_required_categories, missing_categories_message

logger = logging.getLogger(__name__)


class CartBridge(Protocol):
    """Receiver of validated cart additions."""

    def commit(
        self,
        name: str,
        size: str,
        sides: dict,
        additions: list,
        quantity: str,
        total_cost: float,
    ) -> None: ...


def selected_side_items(options: ItemOptions, state: SelectionState) -> list[tuple[str, SideItem]]:
    """Selected sides as (category name, item) pairs in menu order."""
    picked: list[tuple[str, SideItem]] = []
    for category in options.side_categories:
        chosen = state.selected_sides_by_category.get(category.category_name, set())
        picked.extend((category.category_name, item) for item in category.items if item.name in chosen)
    return picked


def selected_additions(options: ItemOptions, state: SelectionState) -> list[Addition]:
    return [addition for addition in options.additions if addition.name in state.selected_additions]


def build_sides_payload(options: ItemOptions, state: SelectionState) -> dict:
    """Shape sides as {"items": [[name, type, price]], "categories": {name: [{...}]}}."""
    payload: dict = {"items": [], "categories": {}}
    for category_name, item in selected_side_items(options, state):
        payload["items"].append([item.name, item.type, item.price])
        payload["categories"].setdefault(category_name, []).append(
            {"name": item.name, "type": item.type, "price": item.price}
        )
    return payload


def build_additions_payload(options: ItemOptions, state: SelectionState) -> list:
    """Flatten additions as [name, price, name, price, ...]."""
    flat: list = []
    for addition in selected_additions(options, state):
        flat.extend((addition.name, addition.price))
    return flat


def compute_total(options: ItemOptions, state: SelectionState) -> float:
    unit_price = resolve_unit_price(options.prices, state.selected_size, state.selected_flavour)
    sides = [item for _, item in selected_side_items(options, state)]
    return resolve_total(unit_price, sides, selected_additions(options, state), state.quantity)


def attempt_add_to_cart(
    name: str,
    url: str,
    options: ItemOptions,
    state: SelectionState,
    cart: CartBridge,
) -> AddToCartResult:
    """
    Validate a selection and hand it to the cart.

    Unfilled required categories block the add with one message naming all of
    them. An item that prices to zero is routed to its full page rather than
    added for free.
    """
    missing = find_missing_required_categories(options.side_categories, state)
    if missing:
        return ValidationFailure(missing=tuple(missing), message=missing_categories_message(missing))

    unit_price = resolve_unit_price(options.prices, state.selected_size, state.selected_flavour)
    if not name or unit_price == 0:
        logger.debug("add_to_cart redirect name=%r unit_price=%r url=%r", name, unit_price, url)
        return OpenDetailPage(url=url)

    entry = CartEntry(
        name=name,
        size=size_label(state.selected_size, state.selected_flavour),
        sides=build_sides_payload(options, state),
        additions=build_additions_payload(options, state),
        quantity=str(state.quantity),
        total_cost=compute_total(options, state),
    )
    cart.commit(entry.name, entry.size, entry.sides, entry.additions, entry.quantity, entry.total_cost)
    logger.info("add_to_cart name=%r size=%r quantity=%s total=%s", entry.name, entry.size, entry.quantity, entry.total_cost)
    return entry
