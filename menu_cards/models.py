"""Domain models for menu-cards."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from menu_cards.session import ItemSession

SENTINEL = "-"
"""Marks a size or flavour dimension that does not apply to an item."""


@dataclass(frozen=True)
class PriceEntry:
    """One (size, flavour, price) combination of an item."""

    size: str
    flavour: str
    price: float


PriceTable = tuple[PriceEntry, ...]


@dataclass(frozen=True)
class SideItem:
    """A selectable item inside a side category."""

    name: str
    type: str = "Regular"
    price: float = 0.0


@dataclass(frozen=True)
class SideCategory:
    """A named group of side items with a selection cap.

    ``max_selected == 0`` means optional and uncapped, ``1`` behaves as a radio
    group, anything larger is a bounded multi-select that must be filled before
    the item can be added to the cart.
    """

    category_name: str
    display_name: str
    items: tuple[SideItem, ...] = ()
    max_selected: int = 0

    def item(self, name: str) -> SideItem | None:
        for side in self.items:
            if side.name == name:
                return side
        return None


@dataclass(frozen=True)
class Addition:
    """A flat-fee add-on that toggles independently."""

    name: str
    price: float = 0.0


@dataclass(frozen=True)
class ItemOptions:
    """Everything needed to render and price one item's option controls."""

    sizes: tuple[str, ...] = ()
    flavours: tuple[str, ...] = ()
    prices: PriceTable = ()
    side_categories: tuple[SideCategory, ...] = ()
    additions: tuple[Addition, ...] = ()
    images: tuple[str, ...] = ()
    content: str = ""

    def category(self, category_name: str) -> SideCategory | None:
        for category in self.side_categories:
            if category.category_name == category_name:
                return category
        return None

    def addition(self, name: str) -> Addition | None:
        for addition in self.additions:
            if addition.name == name:
                return addition
        return None


@dataclass
class SelectionState:
    """Mutable selection of one expanded item."""

    selected_size: str = SENTINEL
    selected_flavour: str = SENTINEL
    selected_sides_by_category: dict[str, set[str]] = field(default_factory=dict)
    selected_additions: set[str] = field(default_factory=set)
    quantity: int = 1

    @classmethod
    def for_options(cls, options: ItemOptions) -> SelectionState:
        """Fresh state defaulted to the first size and flavour."""
        return cls(
            selected_size=options.sizes[0] if options.sizes else SENTINEL,
            selected_flavour=options.flavours[0] if options.flavours else SENTINEL,
            selected_sides_by_category={category.category_name: set() for category in options.side_categories},
        )

    def sides_in(self, category_name: str) -> set[str]:
        return self.selected_sides_by_category.setdefault(category_name, set())


class ToggleOutcome(str, Enum):
    SELECTED = "selected"
    DESELECTED = "deselected"
    CATEGORY_FULL = "category-full"


@dataclass(frozen=True)
class CartEntry:
    """The exact tuple handed to the cart collaborator."""

    name: str
    size: str
    sides: dict
    additions: list
    quantity: str
    total_cost: float


@dataclass(frozen=True)
class ValidationFailure:
    """Add-to-cart was blocked because required side categories are unfilled."""

    missing: tuple[SideCategory, ...]
    message: str


@dataclass(frozen=True)
class OpenDetailPage:
    """Add-to-cart could not price the item; show its full page instead."""

    url: str


AddToCartResult = CartEntry | ValidationFailure | OpenDetailPage


class CardState(str, Enum):
    COLLAPSED = "collapsed"
    LOADING = "loading"
    EXPANDED = "expanded"


@dataclass(eq=False)
class MenuCard:
    """One item card on a menu page, plus whatever it rendered up front."""

    card_id: str
    name: str
    url: str
    price_text: str = ""
    description: str = ""
    sizes: tuple[str, ...] = ()
    flavours: tuple[str, ...] = ()
    attributes: dict[str, str] = field(default_factory=dict)
    state: CardState = CardState.COLLAPSED
    options: ItemOptions | None = None
    session: ItemSession | None = None

    @property
    def is_open(self) -> bool:
        return self.state is not CardState.COLLAPSED
