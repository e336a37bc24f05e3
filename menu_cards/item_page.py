"""Full single-item page screen."""

from __future__ import annotations

import logging
import sqlite3

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from menu_cards.cart import CartBridge
from menu_cards.decoding import SELECTED_FLAVOUR_ATTR, SELECTED_SIZE_ATTR
from menu_cards.expansion import OptionSource
from menu_cards.loader import build_item_options
from menu_cards.message_modal import MessageModal
from menu_cards.models import CartEntry, MenuCard, OpenDetailPage, ToggleOutcome, ValidationFailure
from menu_cards.rendering import checkbox, format_addition_label, format_price_summary, format_side_label
from menu_cards.session import ItemSession

logger = logging.getLogger(__name__)

_SIZE_KIND = "size"
_FLAVOUR_KIND = "flavour"
_SIDE_KIND = "side"
_ADDITION_KIND = "addition"


class ItemPageScreen(ModalScreen[CartEntry | None]):
    """Keyboard-driven page with every option of one item."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "toggle_current", "Toggle"),
        ("plus", "adjust_quantity(1)", "More"),
        ("minus", "adjust_quantity(-1)", "Less"),
        ("a", "add_to_cart", "Add to cart"),
    ]

    CSS = """
    ItemPageScreen {
        align: center middle;
        background: $background 60%;
    }

    #item-dialog {
        width: 72;
        height: auto;
        max-height: 90%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #item-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #item-body {
        margin-bottom: 1;
        color: white;
    }

    #item-status {
        color: #ffb3b3;
    }

    #item-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, card: MenuCard, loader: OptionSource, cart: CartBridge) -> None:
        super().__init__()
        self.card = card
        self.loader = loader
        self.cart = cart
        self.session: ItemSession | None = None
        self.status = ""

    def compose(self) -> ComposeResult:
        with Container(id="item-dialog"):
            yield Static(self.card.name, id="item-title")
            yield Static("Loading…", id="item-body")
            yield Static(id="item-status")
            yield Static("J/K/↑/↓ move, Enter toggle, +/- quantity, A add to cart, Esc/q close", id="item-help")

    def on_mount(self) -> None:
        self.run_worker(self._load_session(), exclusive=True)

    async def _load_session(self) -> None:
        options = self.card.options
        if options is None:
            try:
                options = await self.loader.load(self.card)
            except Exception:
                logger.warning("load_failed card=%r, using markup fallback", self.card.card_id, exc_info=True)
                options = build_item_options(self.card, None)
            self.card.options = options
        session = ItemSession.start(self.card.name, self.card.url, options)

        # Carry over what the card had picked, when it still applies.
        size = self.card.attributes.get(SELECTED_SIZE_ATTR)
        if size in options.sizes:
            session.select_size(size)
        flavour = self.card.attributes.get(SELECTED_FLAVOUR_ATTR)
        if flavour in options.flavours:
            session.select_flavour(flavour)

        self.session = session
        self._refresh_content()

    def action_close(self) -> None:
        self.dismiss(None)

    def action_move_cursor(self, delta: int) -> None:
        rows = self._rows()
        if not rows:
            return
        self.cursor_index = (self.cursor_index + delta) % len(rows)
        self._refresh_content()

    def action_toggle_current(self) -> None:
        rows = self._rows()
        if self.session is None or not rows:
            return
        row_kind, group, value = rows[self.cursor_index]

        self.status = ""
        if row_kind == _SIZE_KIND:
            self.session.select_size(value)
        elif row_kind == _FLAVOUR_KIND:
            self.session.select_flavour(value)
        elif row_kind == _SIDE_KIND:
            if self.session.toggle_side(group, value) is ToggleOutcome.CATEGORY_FULL:
                return
        elif row_kind == _ADDITION_KIND:
            self.session.toggle_addition(value)
        self._refresh_content()

    def action_adjust_quantity(self, delta: int) -> None:
        if self.session is None:
            return
        self.session.adjust_quantity(delta)
        self._refresh_content()

    def action_add_to_cart(self) -> None:
        if self.session is None:
            return
        try:
            result = self.session.add_to_cart(self.cart)
        except sqlite3.Error as exc:
            logger.warning("add_to_cart_failed name=%r error=%r", self.card.name, exc)
            self.status = f"Could not save to cart: {exc}"
            self._refresh_content()
            return

        if isinstance(result, ValidationFailure):
            self.app.push_screen(MessageModal(result.message))
            return
        if isinstance(result, OpenDetailPage):
            # Already on the full page; nothing slower to fall back to.
            self.status = "This item can't be ordered online right now."
            self._refresh_content()
            return
        self.dismiss(result)

    def _rows(self) -> list[tuple[str, str, str]]:
        if self.session is None:
            return []
        options = self.session.options
        rows: list[tuple[str, str, str]] = []
        rows.extend((_SIZE_KIND, "", size) for size in options.sizes)
        rows.extend((_FLAVOUR_KIND, "", flavour) for flavour in options.flavours)
        for category in options.side_categories:
            rows.extend((_SIDE_KIND, category.category_name, item.name) for item in category.items)
        rows.extend((_ADDITION_KIND, "", addition.name) for addition in options.additions)
        return rows

    def _row_text(self, row_kind: str, group: str, value: str) -> Text:
        if self.session is None:
            return Text(value)
        state = self.session.state
        options = self.session.options
        if row_kind == _SIZE_KIND:
            return Text(f"({'•' if value == state.selected_size else ' '}) Size: {value}")
        if row_kind == _FLAVOUR_KIND:
            return Text(f"({'•' if value == state.selected_flavour else ' '}) Flavour: {value}")
        if row_kind == _SIDE_KIND:
            category = options.category(group)
            if category is None:
                return Text(value)
            text = checkbox(f"{category.display_name}: ", value in state.sides_in(group))
            text.append_text(format_side_label(category, value))
            return text
        addition = options.addition(value)
        if addition is None:
            return Text(value)
        text = checkbox("Add: ", value in state.selected_additions)
        text.append_text(format_addition_label(addition))
        return text

    def _refresh_content(self) -> None:
        body = self.query_one("#item-body", Static)
        status = self.query_one("#item-status", Static)
        status.update(self.status)
        if self.session is None:
            return

        content = Text(style="white")
        if self.session.options.content:
            content.append(self.session.options.content, style="italic")
            content.append("\n\n")

        rows = self._rows()
        if self.cursor_index >= len(rows):
            self.cursor_index = max(0, len(rows) - 1)

        for idx, (row_kind, group, value) in enumerate(rows):
            pointer = "➤ " if idx == self.cursor_index else "  "
            content.append(pointer)
            content.append_text(self._row_text(row_kind, group, value))
            content.append("\n")

        content.append(f"\nQuantity {self.session.state.quantity}   ")
        content.append_text(format_price_summary(self.session))
        missing = self.session.missing_categories()
        if missing:
            content.append("\nStill needed: ", style="dim")
            content.append(", ".join(category.display_name for category in missing), style="dim")
        body.update(content)
