"""Inline item card widget."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import Click
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Static

from menu_cards.expansion import ClickTarget
from menu_cards.models import CardState, MenuCard, ToggleOutcome
from menu_cards.rendering import (
    format_addition_label,
    format_card_title,
    format_category_heading,
    format_price_summary,
    format_side_label,
)


class DragHandle(Static):
    """Grip owned by the reordering collaborator; clicks stop here."""

    def on_click(self, event: Click) -> None:
        event.prevent_default()
        event.stop()


class CardLink(Static):
    """Image or title link on a card."""

    class Clicked(Message):
        def __init__(self, link: CardLink) -> None:
            super().__init__()
            self.link = link

    def __init__(self, renderable: str | Text, target: ClickTarget, **kwargs) -> None:
        super().__init__(renderable, **kwargs)
        self.target = target

    def on_click(self, event: Click) -> None:
        event.stop()
        self.post_message(self.Clicked(self))


class OptionArea(Vertical):
    """Holds the option controls of an expanded card."""

    class Clicked(Message):
        pass

    def on_click(self, event: Click) -> None:
        event.stop()
        self.post_message(self.Clicked())


class OptionButton(Button):
    """A button that mutates one aspect of the card's selection."""

    def __init__(self, label: str | Text, kind: str, value: str = "", group: str = "", selected: bool = False) -> None:
        super().__init__(label, variant="primary" if selected else "default", classes="option-button")
        self.kind = kind
        self.value = value
        self.group = group


class MenuCardWidget(Vertical):
    """One menu item card that expands inline to show its options."""

    DEFAULT_CSS = """
    MenuCardWidget {
        height: auto;
        border: round $secondary;
        padding: 0 1;
        margin-bottom: 1;
    }

    MenuCardWidget.-expanded {
        border: round $primary;
    }

    MenuCardWidget .card-header {
        height: auto;
    }

    MenuCardWidget .drag-handle {
        width: 2;
        color: $text-muted;
    }

    MenuCardWidget .image-link {
        width: 3;
    }

    MenuCardWidget .title-link {
        width: 1fr;
    }

    MenuCardWidget .card-description {
        color: $text-muted;
    }

    MenuCardWidget OptionArea {
        height: auto;
        display: none;
    }

    MenuCardWidget.-open OptionArea {
        display: block;
    }

    MenuCardWidget .option-row {
        height: auto;
    }

    MenuCardWidget .option-label {
        width: auto;
        padding: 1 1 0 0;
    }

    MenuCardWidget .option-button {
        min-width: 6;
        margin-right: 1;
    }
    """

    class Clicked(Message):
        """A primary click that the expansion controller should route."""

        def __init__(self, card_widget: MenuCardWidget, target: ClickTarget) -> None:
            super().__init__()
            self.card_widget = card_widget
            self.target = target

    class SelectionChanged(Message):
        def __init__(self, card_widget: MenuCardWidget) -> None:
            super().__init__()
            self.card_widget = card_widget

    class AddRequested(Message):
        def __init__(self, card_widget: MenuCardWidget) -> None:
            super().__init__()
            self.card_widget = card_widget

    def __init__(self, card: MenuCard) -> None:
        super().__init__(id=f"card-{card.card_id}")
        self.card = card

    def compose(self) -> ComposeResult:
        with Horizontal(classes="card-header"):
            yield DragHandle("⠿", classes="drag-handle")
            yield CardLink("▣", ClickTarget.IMAGE_LINK, classes="image-link")
            yield CardLink(format_card_title(self.card), ClickTarget.TITLE_LINK, classes="title-link")
        yield Static(self.card.description, classes="card-description")
        yield OptionArea()

    def on_click(self, event: Click) -> None:
        event.stop()
        self.post_message(self.Clicked(self, ClickTarget.BACKGROUND))

    def on_card_link_clicked(self, message: CardLink.Clicked) -> None:
        message.stop()
        self.post_message(self.Clicked(self, message.link.target))

    def on_option_area_clicked(self, message: OptionArea.Clicked) -> None:
        message.stop()
        self.post_message(self.Clicked(self, ClickTarget.OPTION_CONTROL))

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button = event.button
        if not isinstance(button, OptionButton):
            return
        event.stop()

        session = self.card.session
        if session is None:
            return

        if button.kind == "add_to_cart":
            self.post_message(self.AddRequested(self))
            return

        if button.kind == "size":
            session.select_size(button.value)
        elif button.kind == "flavour":
            session.select_flavour(button.value)
        elif button.kind == "side":
            if session.toggle_side(button.group, button.value) is ToggleOutcome.CATEGORY_FULL:
                return
        elif button.kind == "addition":
            session.toggle_addition(button.value)
        elif button.kind == "quantity":
            session.adjust_quantity(int(button.value))

        self.post_message(self.SelectionChanged(self))
        await self.refresh_card()

    async def refresh_card(self) -> None:
        """Re-render the header and rebuild the option controls from card state."""
        self.set_class(self.card.is_open, "-open")
        self.set_class(self.card.state is CardState.EXPANDED, "-expanded")
        self.query_one(".title-link", CardLink).update(format_card_title(self.card))

        area = self.query_one(OptionArea)
        await area.remove_children()
        if self.card.state is CardState.LOADING:
            await area.mount(Static("Loading…", classes="option-loading"))
            return
        if self.card.state is CardState.EXPANDED:
            await area.mount_all(self._option_widgets())

    def _option_widgets(self) -> list[Widget]:
        session = self.card.session
        if session is None:
            return []
        options = session.options
        state = session.state
        widgets: list[Widget] = []

        if options.content and options.content != self.card.description:
            widgets.append(Static(options.content, classes="option-content"))

        if options.sizes:
            widgets.append(
                self._row(
                    "Size",
                    [OptionButton(size, "size", size, selected=size == state.selected_size) for size in options.sizes],
                )
            )
        if options.flavours:
            widgets.append(
                self._row(
                    "Flavour",
                    [
                        OptionButton(flavour, "flavour", flavour, selected=flavour == state.selected_flavour)
                        for flavour in options.flavours
                    ],
                )
            )

        for category in options.side_categories:
            chosen = state.selected_sides_by_category.get(category.category_name, set())
            widgets.append(Static(format_category_heading(category, len(chosen)), classes="option-label"))
            widgets.append(
                Horizontal(
                    *[
                        OptionButton(
                            format_side_label(category, item.name),
                            "side",
                            item.name,
                            group=category.category_name,
                            selected=item.name in chosen,
                        )
                        for item in category.items
                    ],
                    classes="option-row",
                )
            )

        if options.additions:
            widgets.append(
                self._row(
                    "Add",
                    [
                        OptionButton(
                            format_addition_label(addition),
                            "addition",
                            addition.name,
                            selected=addition.name in state.selected_additions,
                        )
                        for addition in options.additions
                    ],
                )
            )

        widgets.append(
            Horizontal(
                OptionButton("−", "quantity", "-1"),
                Static(str(state.quantity), classes="option-label"),
                OptionButton("+", "quantity", "1"),
                Static(format_price_summary(session), classes="option-label"),
                OptionButton("Add to Cart", "add_to_cart"),
                classes="option-row",
            )
        )
        return widgets

    def _row(self, label: str, buttons: list[OptionButton]) -> Horizontal:
        return Horizontal(Static(label, classes="option-label"), *buttons, classes="option-row")
