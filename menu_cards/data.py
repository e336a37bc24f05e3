"""Static demo menu wrapped into card objects."""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

from menu_cards.constant import DEMO_MENU_CARDS
from menu_cards.decoding import ADDITIONS_ATTR, IMAGES_ATTR, PRICES_ATTR, SIDE_CATEGORIES_ATTR
from menu_cards.models import MenuCard

_ATTRIBUTE_SOURCES = {
    "prices_array": PRICES_ATTR,
    "side_categories": SIDE_CATEGORIES_ATTR,
    "additions": ADDITIONS_ATTR,
    "images": IMAGES_ATTR,
}


def card_from_definition(definition: Mapping[str, Any]) -> MenuCard:
    """Build a card the way a rendered page would present it."""
    attributes = {
        attr_name: json.dumps(definition[key]) for key, attr_name in _ATTRIBUTE_SOURCES.items() if key in definition
    }
    return MenuCard(
        card_id=str(definition["id"]),
        name=str(definition["name"]),
        url=str(definition.get("url", "")),
        price_text=str(definition.get("price_text", "")),
        description=str(definition.get("description", "")),
        sizes=tuple(definition.get("sizes", ())),
        flavours=tuple(definition.get("flavours", ())),
        attributes=attributes,
    )


def build_cards(definitions: Iterable[Mapping[str, Any]] = DEMO_MENU_CARDS) -> list[MenuCard]:
    return [card_from_definition(definition) for definition in definitions]
