"""Blocking message modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static


class MessageModal(ModalScreen[None]):
    """Show one message, such as the unmet side categories of an item."""

    CSS = """
    MessageModal {
        align: center middle;
        background: $background 60%;
    }

    #message-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #message-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #message-body {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #message-help {
        color: #dddddd;
    }
    """

    def __init__(self, message: str, title: str = "Almost there") -> None:
        super().__init__()
        self.message = message
        self.title_text = title

    def compose(self) -> ComposeResult:
        with Container(id="message-dialog"):
            yield Static(self.title_text, id="message-title")
            yield Static(self.message, id="message-body")
            yield Static("Enter/Esc/q close", id="message-help")

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "enter", "q", "ctrl+c"}:
            self.dismiss(None)
            event.stop()

    def on_click(self) -> None:
        self.dismiss(None)
