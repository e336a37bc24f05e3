"""Decode fetched and rendered option data into typed structures.

Menu data arrives in several historical shapes (flat triples, nested rows,
objects, bare numbers). Everything is normalised here so nothing past the load
boundary handles raw lists. None of these functions raise on bad input.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Iterable, Mapping

from menu_cards.models import SENTINEL, Addition, ItemOptions, PriceEntry, PriceTable, SelectionState, SideCategory, SideItem

PRICES_ATTR = "data-prices-array"
SIDE_CATEGORIES_ATTR = "data-side-categories"
ADDITIONS_ATTR = "data-additions"
IMAGES_ATTR = "data-images-array"
SELECTED_SIZE_ATTR = "data-selected-size"
SELECTED_FLAVOUR_ATTR = "data-selected-flavour"

# Index of regular_max in the 9-slot side-category config array.
_REGULAR_MAX_INDEX = 3
_CONFIG_LENGTH = 9
_EMPTY_DIMENSION_VALUES = {"", SENTINEL, "None", "none", "null"}
_PRICE_TEXT_RE = re.compile(r"\d+(?:\.\d+)?")


def _to_price(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        price = float(value)
    elif isinstance(value, str):
        try:
            price = float(value.strip().lstrip("$"))
        except ValueError:
            return 0.0
    else:
        return 0.0
    if math.isnan(price) or math.isinf(price) or price < 0:
        return 0.0
    return price


def _to_count(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        count = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, count)


def _dimension(value: Any) -> str:
    if value is None:
        return SENTINEL
    text = str(value).strip()
    if text in _EMPTY_DIMENSION_VALUES:
        return SENTINEL
    return text


def _records(raw: Any, keys: tuple[str, ...]) -> list[tuple[Any, ...]]:
    """Read flat, nested-row or object encodings into fixed-width tuples."""
    if not isinstance(raw, (list, tuple)) or not raw:
        return []

    width = len(keys)
    first = raw[0]
    if isinstance(first, Mapping):
        return [tuple(row.get(key) for key in keys) for row in raw if isinstance(row, Mapping)]
    if isinstance(first, (list, tuple)):
        rows = []
        for row in raw:
            if not isinstance(row, (list, tuple)):
                continue
            padded = tuple(row[:width]) + (None,) * max(0, width - len(row))
            rows.append(padded)
        return rows

    # Flat encoding; a trailing partial record is dropped.
    usable = len(raw) - len(raw) % width
    return [tuple(raw[idx : idx + width]) for idx in range(0, usable, width)]


def clean_dimension_values(values: Any) -> tuple[str, ...]:
    """Drop blank, sentinel and "None" entries from a size or flavour list."""
    if not isinstance(values, (list, tuple)):
        return ()
    cleaned: list[str] = []
    for value in values:
        text = _dimension(value)
        if text != SENTINEL and text not in cleaned:
            cleaned.append(text)
    return tuple(cleaned)


def decode_price_table(raw: Any) -> PriceTable:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        price = _to_price(raw)
        return (PriceEntry(SENTINEL, SENTINEL, price),) if price > 0 else ()

    if isinstance(raw, (list, tuple)) and 0 < len(raw) < 3 and isinstance(raw[0], (int, float)):
        return decode_price_table(raw[0])

    return tuple(
        PriceEntry(size=_dimension(size), flavour=_dimension(flavour), price=_to_price(price))
        for size, flavour, price in _records(raw, ("size", "flavour", "price"))
    )


def _category_cap(config: Any) -> int:
    if isinstance(config, (list, tuple)):
        if len(config) > _REGULAR_MAX_INDEX:
            return _to_count(config[_REGULAR_MAX_INDEX])
        return 0
    if isinstance(config, Mapping):
        return _to_count(config.get("regular_max"))
    return 0


def decode_side_categories(raw: Any) -> tuple[SideCategory, ...]:
    if not isinstance(raw, (list, tuple)):
        return ()

    categories: list[SideCategory] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            continue
        category_name = str(entry.get("category_name") or "").strip()
        if not category_name:
            continue
        display_name = str(entry.get("display_name") or "").strip() or category_name

        items = []
        for name, item_type, price in _records(entry.get("items"), ("name", "type", "price")):
            item_name = str(name).strip() if name is not None else ""
            if not item_name:
                continue
            items.append(
                SideItem(
                    name=item_name,
                    type=str(item_type).strip() if item_type else "Regular",
                    price=_to_price(price),
                )
            )

        categories.append(
            SideCategory(
                category_name=category_name,
                display_name=display_name,
                items=tuple(items),
                max_selected=_category_cap(entry.get("config")),
            )
        )
    return tuple(categories)


def decode_additions(raw: Any) -> tuple[Addition, ...]:
    additions = []
    for name, price in _records(raw, ("name", "price")):
        addition_name = str(name).strip() if name is not None else ""
        if addition_name:
            additions.append(Addition(name=addition_name, price=_to_price(price)))
    return tuple(additions)


def normalize_images(raw: Any) -> tuple[str, ...]:
    """Flatten image lists that mix plain paths and legacy {"image": path} objects."""
    if not isinstance(raw, (list, tuple)):
        return ()
    images: list[str] = []
    for entry in raw:
        if isinstance(entry, Mapping):
            entry = entry.get("image")
        if isinstance(entry, str) and entry.strip():
            images.append(entry.strip())
    return tuple(images)


def parse_price_text(text: Any) -> float:
    """Pull the first number out of a rendered price like "$12.50"."""
    if not isinstance(text, str):
        return 0.0
    match = _PRICE_TEXT_RE.search(text)
    if match is None:
        return 0.0
    return _to_price(match.group(0))


def base_price_from_payload(payload: Any) -> float:
    if not isinstance(payload, Mapping):
        return 0.0
    return _to_price(payload.get("price"))


def decode_item_options(payload: Any) -> ItemOptions:
    """Decode an item's JSON document; unknown or missing fields decode empty."""
    if not isinstance(payload, Mapping):
        return ItemOptions()

    prices = decode_price_table(payload.get("items"))
    if not prices:
        prices = decode_price_table(payload.get("prices"))

    content = payload.get("content")
    return ItemOptions(
        sizes=clean_dimension_values(payload.get("sizes")),
        flavours=clean_dimension_values(payload.get("flavours")),
        prices=prices,
        side_categories=decode_side_categories(payload.get("side_categories")),
        additions=decode_additions(payload.get("additions")),
        images=normalize_images(payload.get("images")),
        content=content.strip() if isinstance(content, str) else "",
    )


def synthesize_price_table(sizes: Iterable[str], flavours: Iterable[str], base_price: float) -> PriceTable:
    """Build a table carrying one base price when no per-combination prices exist."""
    if base_price <= 0:
        return ()
    sizes = tuple(sizes)
    flavours = tuple(flavours)
    if sizes and flavours:
        return tuple(PriceEntry(size, flavour, base_price) for size in sizes for flavour in flavours)
    if sizes:
        return tuple(PriceEntry(size, SENTINEL, base_price) for size in sizes)
    if flavours:
        return tuple(PriceEntry(SENTINEL, flavour, base_price) for flavour in flavours)
    return (PriceEntry(SENTINEL, SENTINEL, base_price),)


def _json_attr(attributes: Mapping[str, str], name: str) -> Any:
    raw = attributes.get(name)
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


def options_from_attributes(
    attributes: Mapping[str, str], sizes: Iterable[str] = (), flavours: Iterable[str] = ()
) -> ItemOptions:
    """Recover option data from what a card already carries in its markup."""
    return ItemOptions(
        sizes=clean_dimension_values(list(sizes)),
        flavours=clean_dimension_values(list(flavours)),
        prices=decode_price_table(_json_attr(attributes, PRICES_ATTR)),
        side_categories=decode_side_categories(_json_attr(attributes, SIDE_CATEGORIES_ATTR)),
        additions=decode_additions(_json_attr(attributes, ADDITIONS_ATTR)),
        images=normalize_images(_json_attr(attributes, IMAGES_ATTR)),
    )


def _config_array(cap: int) -> list[int]:
    config = [0] * _CONFIG_LENGTH
    config[0] = config[1] = cap
    config[_REGULAR_MAX_INDEX] = config[_REGULAR_MAX_INDEX + 1] = cap
    return config


def options_to_attributes(options: ItemOptions) -> dict[str, str]:
    """Snapshot decoded options back into the card's wire-format attributes."""
    return {
        PRICES_ATTR: json.dumps([value for entry in options.prices for value in (entry.size, entry.flavour, entry.price)]),
        SIDE_CATEGORIES_ATTR: json.dumps(
            [
                {
                    "category_name": category.category_name,
                    "display_name": category.display_name,
                    "items": [value for item in category.items for value in (item.name, item.type, item.price)],
                    "config": _config_array(category.max_selected),
                }
                for category in options.side_categories
            ]
        ),
        ADDITIONS_ATTR: json.dumps([value for addition in options.additions for value in (addition.name, addition.price)]),
        IMAGES_ATTR: json.dumps(list(options.images)),
    }


def selection_to_attributes(state: SelectionState) -> dict[str, str]:
    return {
        SELECTED_SIZE_ATTR: state.selected_size,
        SELECTED_FLAVOUR_ATTR: state.selected_flavour,
    }
