"""Per-item selection session shared by the card and full-page views."""

from __future__ import annotations

from dataclasses import dataclass

from menu_cards.cart import CartBridge, attempt_add_to_cart, compute_total
from menu_cards.models import AddToCartResult, ItemOptions, SelectionState, SideCategory, ToggleOutcome
from menu_cards.pricing import resolve_unit_price
from menu_cards.selection import (
    adjust_quantity,
    find_missing_required_categories,
    select_flavour,
    select_size,
    toggle_addition,
    toggle_side_selection,
)


@dataclass
class ItemSession:
    """One item's loaded options and the user's current picks."""

    name: str
    url: str
    options: ItemOptions
    state: SelectionState

    @classmethod
    def start(cls, name: str, url: str, options: ItemOptions) -> ItemSession:
        return cls(name=name, url=url, options=options, state=SelectionState.for_options(options))

    def select_size(self, size: str) -> None:
        select_size(self.state, self.options, size)

    def select_flavour(self, flavour: str) -> None:
        select_flavour(self.state, self.options, flavour)

    def toggle_side(self, category_name: str, item_name: str) -> ToggleOutcome:
        category = self.options.category(category_name)
        if category is None:
            raise KeyError(category_name)
        return toggle_side_selection(self.state, category, item_name)

    def toggle_addition(self, name: str) -> bool:
        if self.options.addition(name) is None:
            raise KeyError(name)
        return toggle_addition(self.state, name)

    def adjust_quantity(self, delta: int) -> int:
        return adjust_quantity(self.state, delta)

    def unit_price(self) -> float:
        return resolve_unit_price(self.options.prices, self.state.selected_size, self.state.selected_flavour)

    def total(self) -> float:
        return compute_total(self.options, self.state)

    def missing_categories(self) -> list[SideCategory]:
        return find_missing_required_categories(self.options.side_categories, self.state)

    def add_to_cart(self, cart: CartBridge) -> AddToCartResult:
        return attempt_add_to_cart(self.name, self.url, self.options, self.state, cart)
