import asyncio
import json

import httpx

from menu_cards.decoding import PRICES_ATTR
from menu_cards.loader import OptionLoader, build_item_options
from menu_cards.models import MenuCard, PriceEntry
from menu_cards.pricing import resolve_unit_price


def _card(**overrides):
    values = {"card_id": "ramen", "name": "Ramen", "url": "/menu/ramen"}
    values.update(overrides)
    return MenuCard(**values)


def _loader(handler, base_url="https://example.test"):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OptionLoader(base_url=base_url, client=client)


def test_candidate_urls():
    loader = OptionLoader(base_url="https://example.test/")
    assert loader.candidate_urls("/menu/ramen/") == [
        "https://example.test/menu/ramen/index.json",
        "https://example.test/menu/ramen.json",
    ]
    assert loader.candidate_urls("https://cdn.test/x") == ["https://cdn.test/x/index.json", "https://cdn.test/x.json"]
    assert OptionLoader(base_url="").candidate_urls("/menu/ramen") == []


def test_load_prefers_index_json():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, json={"sizes": ["Large"], "items": ["Large", "-", 14]})

    options = asyncio.run(_loader(handler).load(_card()))
    assert options.prices == (PriceEntry("Large", "-", 14.0),)
    assert seen == ["https://example.test/menu/ramen/index.json"]


def test_load_falls_through_to_dot_json():
    def handler(request):
        if request.url.path.endswith("index.json"):
            return httpx.Response(404)
        return httpx.Response(200, json={"flavours": ["Mild"], "items": [["-", "Mild", 9]]})

    options = asyncio.run(_loader(handler).load(_card()))
    assert options.flavours == ("Mild",)
    assert options.prices == (PriceEntry("-", "Mild", 9.0),)


def test_bad_json_and_transport_errors_fall_back_to_markup():
    def handler(request):
        if request.url.path.endswith("index.json"):
            return httpx.Response(200, content=b"<html>not json</html>")
        raise httpx.ConnectError("offline", request=request)

    card = _card(attributes={PRICES_ATTR: json.dumps(["-", "-", 11])})
    options = asyncio.run(_loader(handler).load(card))
    assert options.prices == (PriceEntry("-", "-", 11.0),)


def test_non_object_json_is_ignored():
    def handler(request):
        return httpx.Response(200, json=["Large", "-", 14])

    options = asyncio.run(_loader(handler).load(_card(price_text="$6")))
    assert options.prices == (PriceEntry("-", "-", 6.0),)


def test_no_base_url_skips_the_network():
    def handler(request):
        raise AssertionError("should not fetch")

    card = _card(price_text="$4.50", description="Tofu and wakame")
    options = asyncio.run(_loader(handler, base_url="").load(card))
    assert options.prices == (PriceEntry("-", "-", 4.5),)
    assert options.content == "Tofu and wakame"


def test_partial_json_is_completed_from_markup():
    card = _card(
        sizes=("Regular", "Large"),
        price_text="$14",
        attributes={"data-additions": json.dumps(["Egg", 1.5])},
    )
    options = build_item_options(card, {"content": "Rich broth"})
    assert options.sizes == ("Regular", "Large")
    assert options.prices == (PriceEntry("Regular", "-", 14.0), PriceEntry("Large", "-", 14.0))
    assert options.additions[0].name == "Egg"
    assert options.content == "Rich broth"


def test_json_base_price_beats_card_price_text():
    options = build_item_options(_card(price_text="$3"), {"price": 7})
    assert options.prices == (PriceEntry("-", "-", 7.0),)


def test_nothing_knowable_gives_empty_table():
    options = build_item_options(_card(price_text="Market price"), None)
    assert options.prices == ()


def test_zero_priced_json_table_falls_back_to_card_price_text():
    card = _card(price_text="$12")
    options = build_item_options(card, {"items": ["-", "-", 0]})
    assert options.prices == (PriceEntry("-", "-", 12.0),)
    assert resolve_unit_price(options.prices, "-", "-") == 12.0


def test_zero_priced_json_table_falls_back_to_markup_prices():
    card = _card(sizes=("Small",), attributes={PRICES_ATTR: json.dumps(["Small", "-", 9])})
    options = build_item_options(card, {"items": ["Small", "-", 0]})
    assert options.prices == (PriceEntry("Small", "-", 9.0),)


def test_zero_priced_table_is_kept_when_nothing_better_is_known():
    options = build_item_options(_card(price_text="Market price"), {"items": ["-", "-", 0]})
    assert options.prices == (PriceEntry("-", "-", 0.0),)
