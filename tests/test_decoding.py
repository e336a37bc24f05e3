import json

from menu_cards.decoding import (
    PRICES_ATTR,
    SELECTED_FLAVOUR_ATTR,
    SELECTED_SIZE_ATTR,
    clean_dimension_values,
    decode_additions,
    decode_item_options,
    decode_price_table,
    decode_side_categories,
    normalize_images,
    options_from_attributes,
    options_to_attributes,
    parse_price_text,
    selection_to_attributes,
    synthesize_price_table,
)
from menu_cards.models import Addition, PriceEntry, SelectionState, SideItem
from menu_cards.pricing import resolve_unit_price


def test_price_table_from_flat_triples_drops_partial_tail():
    table = decode_price_table(["Small", "-", 8, "Large", "-", "11.5", "Huge", "-"])
    assert table == (PriceEntry("Small", "-", 8.0), PriceEntry("Large", "-", 11.5))


def test_price_table_from_nested_rows_and_objects():
    nested = decode_price_table([["-", "Vanilla", 5], ["-", "Chocolate", 6]])
    objects = decode_price_table([{"size": "-", "flavour": "Vanilla", "price": 5}, {"flavour": "Chocolate", "price": 6}])
    assert nested == objects == (PriceEntry("-", "Vanilla", 5.0), PriceEntry("-", "Chocolate", 6.0))


def test_price_table_from_bare_number():
    assert decode_price_table(9.5) == (PriceEntry("-", "-", 9.5),)
    assert decode_price_table([12]) == (PriceEntry("-", "-", 12.0),)
    assert decode_price_table(0) == ()


def test_price_table_normalises_blank_dimensions_and_bad_prices():
    table = decode_price_table([["", None, "abc"], ["None", "Mild", -4], ["Large", "Hot", "$7"]])
    assert table == (
        PriceEntry("-", "-", 0.0),
        PriceEntry("-", "Mild", 0.0),
        PriceEntry("Large", "Hot", 7.0),
    )


def test_price_table_tolerates_garbage():
    assert decode_price_table(None) == ()
    assert decode_price_table("not a table") == ()
    assert decode_price_table({"size": "Large"}) == ()
    assert decode_price_table(True) == ()


def test_side_categories_read_array_config_regular_slot():
    categories = decode_side_categories(
        [
            {
                "category_name": "rolls",
                "display_name": "Choose Your 3 Rolls",
                "items": ["California", "Regular", 0, "Dragon", "Premium", "3"],
                "config": [5, 5, 0, 3, 3, 0, 0, 0, 0],
            }
        ]
    )
    assert len(categories) == 1
    rolls = categories[0]
    assert rolls.max_selected == 3
    assert rolls.display_name == "Choose Your 3 Rolls"
    assert rolls.items == (SideItem("California", "Regular", 0.0), SideItem("Dragon", "Premium", 3.0))


def test_side_categories_object_config_and_object_items():
    categories = decode_side_categories(
        [
            {
                "category_name": "broth",
                "items": [{"name": "Shoyu"}, {"name": "Black Garlic", "type": "Premium", "price": 1.5}],
                "config": {"all_max": 1, "regular_max": 1},
            },
            {"display_name": "nameless"},
            "junk",
        ]
    )
    assert len(categories) == 1
    broth = categories[0]
    assert broth.display_name == "broth"
    assert broth.max_selected == 1
    assert broth.items[0] == SideItem("Shoyu", "Regular", 0.0)


def test_side_category_without_config_is_optional():
    categories = decode_side_categories([{"category_name": "toppings", "items": []}])
    assert categories[0].max_selected == 0
    assert decode_side_categories([{"category_name": "x", "config": [1, 2]}])[0].max_selected == 0


def test_additions_all_encodings():
    expected = (Addition("Egg", 1.5), Addition("Nori", 0.5))
    assert decode_additions(["Egg", 1.5, "Nori", 0.5]) == expected
    assert decode_additions([["Egg", 1.5], ["Nori", 0.5]]) == expected
    assert decode_additions([{"name": "Egg", "price": 1.5}, {"name": "Nori", "price": "0.5"}]) == expected
    assert decode_additions(None) == ()


def test_images_mix_strings_and_legacy_objects():
    assert normalize_images(["a.jpg", {"image": "b.jpg"}, {"alt": "x"}, "", 5]) == ("a.jpg", "b.jpg")


def test_dimension_lists_drop_placeholders():
    assert clean_dimension_values(["Small", "-", "None", "", None, "Large", "Small"]) == ("Small", "Large")
    assert clean_dimension_values("Small") == ()


def test_parse_price_text():
    assert parse_price_text("$12.50") == 12.5
    assert parse_price_text("From $9") == 9
    assert parse_price_text("Market price") == 0
    assert parse_price_text(None) == 0


def test_item_options_degrade_on_missing_fields():
    options = decode_item_options({"sizes": ["Large"], "content": "  <p>Tasty</p> "})
    assert options.sizes == ("Large",)
    assert options.prices == ()
    assert options.side_categories == ()
    assert options.content == "<p>Tasty</p>"
    assert decode_item_options(["not", "a", "dict"]).prices == ()


def test_item_options_accept_legacy_prices_key():
    options = decode_item_options({"prices": [["Large", "-", 10]]})
    assert options.prices == (PriceEntry("Large", "-", 10.0),)


def test_synthesis_tiers():
    assert synthesize_price_table((), (), 4.5) == (PriceEntry("-", "-", 4.5),)
    assert synthesize_price_table(("Regular", "Large"), (), 14) == (
        PriceEntry("Regular", "-", 14),
        PriceEntry("Large", "-", 14),
    )
    assert synthesize_price_table((), ("Mild",), 3) == (PriceEntry("-", "Mild", 3),)
    assert len(synthesize_price_table(("S", "L"), ("Mild", "Hot"), 3)) == 4
    assert synthesize_price_table(("S",), (), 0) == ()


def test_synthesized_table_never_prices_to_zero():
    for sizes, flavours in [((), ()), (("Regular",), ()), ((), ("Mild",)), (("S", "L"), ("Mild",))]:
        table = synthesize_price_table(sizes, flavours, 6)
        size = sizes[0] if sizes else "-"
        flavour = flavours[0] if flavours else "-"
        assert resolve_unit_price(table, size, flavour) > 0


def test_attribute_snapshot_survives_a_round_trip():
    options = decode_item_options(
        {
            "sizes": ["Small"],
            "items": ["Small", "-", 8],
            "side_categories": [
                {"category_name": "rolls", "display_name": "Rolls", "items": ["A", "Regular", 0], "config": [3, 3, 0, 3, 3, 0, 0, 0, 0]}
            ],
            "additions": ["Egg", 1],
            "images": [{"image": "a.jpg"}],
        }
    )
    attributes = options_to_attributes(options)
    assert json.loads(attributes[PRICES_ATTR]) == ["Small", "-", 8.0]

    restored = options_from_attributes(attributes, sizes=["Small"])
    assert restored.prices == options.prices
    assert restored.side_categories == options.side_categories
    assert restored.additions == options.additions
    assert restored.images == ("a.jpg",)


def test_bad_attribute_json_is_ignored():
    restored = options_from_attributes({PRICES_ATTR: "[oops"})
    assert restored.prices == ()


def test_selection_attributes():
    state = SelectionState(selected_size="Large", selected_flavour="-")
    assert selection_to_attributes(state) == {SELECTED_SIZE_ATTR: "Large", SELECTED_FLAVOUR_ATTR: "-"}
