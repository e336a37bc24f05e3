"""Main Textual app class."""

from __future__ import annotations

import logging
import sqlite3

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.widgets import Header, Static

from menu_cards.card_widget import MenuCardWidget
from menu_cards.data import build_cards
from menu_cards.expansion import ClickOutcome, ClickTarget, ExpansionController
from menu_cards.item_page import ItemPageScreen
from menu_cards.loader import OptionLoader
from menu_cards.message_modal import MessageModal
from menu_cards.models import CartEntry, MenuCard, OpenDetailPage, ValidationFailure
from menu_cards.persistence import SqliteCart
from menu_cards.pricing import format_price
from menu_cards.rendering import format_cart_lines

logger = logging.getLogger(__name__)


class MenuApp(App):
    """A Textual app for browsing menu item cards and building a cart."""

    TITLE = "Menu"
    SUB_TITLE = "Order online"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #menu-pane {
        width: 3fr;
        border: round $primary;
        padding: 0 1;
    }

    #cart-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #status-bar {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        ("escape", "collapse_active", "Collapse"),
        Binding("ctrl+x", "clear_cart", "Clear cart", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        cards: list[MenuCard] | None = None,
        loader: OptionLoader | None = None,
        cart: SqliteCart | None = None,
    ) -> None:
        super().__init__()
        self.cards = cards if cards is not None else build_cards()
        self.loader = loader if loader is not None else OptionLoader()
        self.cart = cart if cart is not None else SqliteCart()
        self.controller = ExpansionController(
            self.cards,
            self.loader,
            on_change=self._on_card_changed,
            track_click=self._track_card_click,
        )
        self.system_status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with VerticalScroll(id="menu-pane"):
                for card in self.cards:
                    yield MenuCardWidget(card)
            with Vertical(id="cart-pane"):
                yield Static("Cart", classes="pane-title")
                yield Static(id="cart-list")
        yield Static(id="status-bar")

    def on_mount(self) -> None:
        self._refresh_cart()
        self._refresh_status()

    async def on_unmount(self) -> None:
        await self.loader.aclose()

    def on_menu_card_widget_clicked(self, message: MenuCardWidget.Clicked) -> None:
        self.run_worker(self._route_click(message.card_widget.card, message.target), group="expansion")

    async def _route_click(self, card: MenuCard, target: ClickTarget) -> None:
        outcome = await self.controller.handle_click(card, target)
        if outcome is ClickOutcome.PASSED_THROUGH and target in {ClickTarget.IMAGE_LINK, ClickTarget.TITLE_LINK}:
            self.open_item_page(card)

    def on_menu_card_widget_selection_changed(self, message: MenuCardWidget.SelectionChanged) -> None:
        self.controller.remember_selection(message.card_widget.card)

    def on_menu_card_widget_add_requested(self, message: MenuCardWidget.AddRequested) -> None:
        card = message.card_widget.card
        if card.session is None:
            return
        try:
            result = card.session.add_to_cart(self.cart)
        except sqlite3.Error as exc:
            logger.warning("add_to_cart_failed name=%r error=%r", card.name, exc)
            self.system_status = f"Could not save to cart: {exc}"
            self._refresh_status()
            return

        if isinstance(result, ValidationFailure):
            self.push_screen(MessageModal(result.message))
            return
        if isinstance(result, OpenDetailPage):
            self.open_item_page(card)
            return
        self._on_added(result)

    def open_item_page(self, card: MenuCard) -> None:
        self.push_screen(ItemPageScreen(card, self.loader, self.cart), callback=self._on_item_page_closed)

    def _on_item_page_closed(self, result: CartEntry | None) -> None:
        if result is not None:
            self._on_added(result)

    def _on_added(self, entry: CartEntry) -> None:
        self.system_status = f"Added {entry.quantity}× {entry.name} ({format_price(entry.total_cost)})"
        self._refresh_cart()
        self._refresh_status()

    def action_collapse_active(self) -> None:
        active = self.controller.active
        if active is not None:
            self.controller.collapse(active)

    def action_clear_cart(self) -> None:
        self.cart.clear()
        self.system_status = "Cart cleared"
        self._refresh_cart()
        self._refresh_status()

    def _track_card_click(self, card: MenuCard) -> None:
        logger.debug("card_click id=%r url=%r", card.card_id, card.url)

    def _on_card_changed(self, card: MenuCard) -> None:
        try:
            widget = self.query_one(f"#card-{card.card_id}", MenuCardWidget)
        except NoMatches:
            return
        self.call_later(widget.refresh_card)

    def _refresh_cart(self) -> None:
        try:
            cart_widget = self.query_one("#cart-list", Static)
        except NoMatches:
            return
        cart_widget.update(format_cart_lines(self.cart.lines()))

    def _refresh_status(self) -> None:
        count = self.cart.item_count()
        status = self.system_status or "Click a card to see its options. Ctrl+X clear cart, Ctrl+Q quit."
        self.query_one("#status-bar", Static).update(f"Cart: {count} item(s) · {status}")
