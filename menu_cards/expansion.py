"""Expand/collapse state machine for a page of item cards."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterable, Protocol

from menu_cards.decoding import options_to_attributes, selection_to_attributes
from menu_cards.loader import build_item_options
from menu_cards.models import CardState, ItemOptions, MenuCard
from menu_cards.session import ItemSession

logger = logging.getLogger(__name__)


class ClickTarget(str, Enum):
    BACKGROUND = "background"
    IMAGE_LINK = "image_link"
    TITLE_LINK = "title_link"
    OPTION_CONTROL = "option_control"
    DRAG_HANDLE = "drag_handle"


class ClickOutcome(str, Enum):
    IGNORED = "ignored"
    PASSED_THROUGH = "passed_through"
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"
    DISCARDED = "discarded"


class OptionSource(Protocol):
    async def load(self, card: MenuCard) -> ItemOptions: ...


class ExpansionController:
    """
    Owns which card on a page is open.

    At most one card is ever Loading or Expanded. Opening a card collapses the
    previous one first; a load that settles after its card stopped being the
    active one is dropped.
    """

    def __init__(
        self,
        cards: Iterable[MenuCard],
        loader: OptionSource,
        on_change: Callable[[MenuCard], None] | None = None,
        track_click: Callable[[MenuCard], None] | None = None,
    ) -> None:
        self.cards = list(cards)
        self._loader = loader
        self._on_change = on_change
        self._track_click = track_click
        self._active: MenuCard | None = None
        self._generation = 0

    @property
    def active(self) -> MenuCard | None:
        return self._active

    def open_cards(self) -> list[MenuCard]:
        return [card for card in self.cards if card.is_open]

    async def handle_click(self, card: MenuCard, target: ClickTarget) -> ClickOutcome:
        """Route a primary click on a card to the right transition."""
        if target is ClickTarget.DRAG_HANDLE:
            return ClickOutcome.IGNORED

        if card.is_open:
            # Links and option controls of an open card run their own handlers.
            if target is not ClickTarget.BACKGROUND:
                return ClickOutcome.PASSED_THROUGH
            self.collapse(card)
            return ClickOutcome.COLLAPSED

        if self._track_click is not None:
            self._track_click(card)
        return await self.expand(card)

    async def expand(self, card: MenuCard) -> ClickOutcome:
        for other in self.cards:
            if other is not card and other.is_open:
                self.collapse(other)
        if self._active is not None and self._active is not card:
            self.collapse(self._active)

        self._generation += 1
        token = self._generation
        self._active = card
        card.state = CardState.LOADING
        card.session = None
        self._notify(card)

        options = card.options
        if options is None:
            try:
                options = await self._loader.load(card)
            except Exception:
                logger.warning("load_failed card=%r, using markup fallback", card.card_id, exc_info=True)
                options = build_item_options(card, None)

        if token != self._generation or self._active is not card:
            logger.debug("load_discarded card=%r", card.card_id)
            return ClickOutcome.DISCARDED

        card.options = options
        card.attributes.update(options_to_attributes(options))
        card.session = ItemSession.start(card.name, card.url, options)
        card.attributes.update(selection_to_attributes(card.session.state))
        card.state = CardState.EXPANDED
        self._notify(card)
        return ClickOutcome.EXPANDED

    def collapse(self, card: MenuCard) -> None:
        if not card.is_open:
            return
        card.state = CardState.COLLAPSED
        card.session = None
        if self._active is card:
            self._active = None
        self._notify(card)

    def remember_selection(self, card: MenuCard) -> None:
        """Mirror the card's current size/flavour into its markup attributes."""
        if card.session is not None:
            card.attributes.update(selection_to_attributes(card.session.state))

    def reset(self) -> None:
        """Forget the open card, as on navigating to a new page."""
        self._generation += 1
        for card in self.cards:
            self.collapse(card)
        self._active = None

    def _notify(self, card: MenuCard) -> None:
        if self._on_change is not None:
            self._on_change(card)
