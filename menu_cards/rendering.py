"""Rich text formatting for cards, option rows and the cart pane."""

from __future__ import annotations

from rich.text import Text

from menu_cards.models import SENTINEL, Addition, CardState, MenuCard, SideCategory
from menu_cards.persistence import CartLine
from menu_cards.pricing import format_price
from menu_cards.session import ItemSession


def badge_style(side_type: str) -> str:
    """Return a consistent badge style for side item tiers."""
    if side_type == "Premium":
        return "bold #ffffff on #b23a48"
    return "bold #0b1f0f on #5fbf72"


def format_card_title(card: MenuCard) -> Text:
    text = Text()
    marker = {"collapsed": "▸ ", "loading": "… ", "expanded": "▾ "}[card.state.value]
    text.append(marker, style="dim")
    text.append(card.name, style="bold underline" if card.state is CardState.EXPANDED else "bold")
    if card.price_text:
        text.append(f"  {card.price_text}", style="#5fbf72")
    return text


def checkbox(label: str, checked: bool) -> Text:
    return Text(f"[{'x' if checked else ' '}] {label}", style="bold" if checked else "")


def format_side_label(category: SideCategory, name: str) -> Text:
    item = category.item(name)
    text = Text(name)
    if item is None:
        return text
    if item.type != "Regular":
        text.append(" ")
        text.append(item.type[:1], style=badge_style(item.type))
    if item.price > 0:
        text.append(f" +{format_price(item.price)}", style="dim")
    return text


def format_addition_label(addition: Addition) -> Text:
    text = Text(addition.name)
    if addition.price > 0:
        text.append(f" +{format_price(addition.price)}", style="dim")
    return text


def format_category_heading(category: SideCategory, chosen: int) -> Text:
    text = Text(category.display_name, style="bold")
    if category.max_selected > 0:
        style = "#5fbf72" if chosen >= category.max_selected else "#ffb3b3"
        text.append(f"  {chosen}/{category.max_selected}", style=style)
    return text


def format_price_summary(session: ItemSession) -> Text:
    text = Text()
    text.append(format_price(session.unit_price()))
    text.append(f" × {session.state.quantity} = ", style="dim")
    text.append(format_price(session.total()), style="bold")
    return text


def format_cart_lines(lines: list[CartLine]) -> Text:
    if not lines:
        return Text("(cart is empty)", style="dim")

    text = Text()
    grand_total = 0.0
    for idx, line in enumerate(lines):
        if idx > 0:
            text.append("\n")
        text.append(f"{line.quantity}× {line.name}")
        if line.size != SENTINEL:
            text.append(f" ({line.size})", style="dim")
        text.append(f"  {format_price(line.total_cost)}")
        side_names = [item[0] for item in line.sides.get("items", [])]
        addition_names = line.additions[0::2]
        extras = side_names + addition_names
        if extras:
            text.append(f"\n    {', '.join(extras)}", style="dim")
        grand_total += line.total_cost
    text.append(f"\n\nTotal {format_price(grand_total)}", style="bold")
    return text
