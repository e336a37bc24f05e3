from menu_cards.cart import attempt_add_to_cart, build_additions_payload, build_sides_payload
from menu_cards.decoding import decode_item_options
from menu_cards.models import CartEntry, OpenDetailPage, SelectionState, ValidationFailure
from menu_cards.session import ItemSession


class RecordingCart:
    def __init__(self):
        self.commits = []

    def commit(self, name, size, sides, additions, quantity, total_cost):
        self.commits.append((name, size, sides, additions, quantity, total_cost))


def _platter_options():
    return decode_item_options(
        {
            "sizes": ["Small", "Large"],
            "items": ["Small", "-", 32, "Large", "-", 48],
            "side_categories": [
                {
                    "category_name": "rolls",
                    "display_name": "Rolls",
                    "items": ["California", "Regular", 0, "Salmon", "Regular", 0, "Dragon", "Premium", 3],
                    "config": [3, 3, 0, 3, 3, 0, 0, 0, 0],
                },
                {
                    "category_name": "sauce",
                    "display_name": "Sauce",
                    "items": ["Soy", "Regular", 0, "Eel", "Regular", 0.5],
                    "config": [1, 1, 0, 1, 1, 0, 0, 0, 0],
                },
            ],
            "additions": ["Miso Soup", 3, "Edamame", 4],
        }
    )


def test_missing_categories_block_the_cart():
    cart = RecordingCart()
    session = ItemSession.start("Sushi Party Platter", "/menu/platter", _platter_options())
    session.toggle_side("rolls", "California")

    result = session.add_to_cart(cart)

    assert isinstance(result, ValidationFailure)
    assert [c.display_name for c in result.missing] == ["Rolls", "Sauce"]
    assert result.message == "Please select a Rolls and Sauce before adding to cart."
    assert cart.commits == []


def test_complete_selection_commits_wire_shape():
    cart = RecordingCart()
    session = ItemSession.start("Sushi Party Platter", "/menu/platter", _platter_options())
    session.select_size("Large")
    for roll in ("Dragon", "California", "Salmon"):
        session.toggle_side("rolls", roll)
    session.toggle_side("sauce", "Eel")
    session.toggle_addition("Edamame")
    session.adjust_quantity(1)

    result = session.add_to_cart(cart)

    assert isinstance(result, CartEntry)
    name, size, sides, additions, quantity, total = cart.commits[0]
    assert name == "Sushi Party Platter"
    assert size == "Large"
    assert sides["items"] == [
        ["California", "Regular", 0.0],
        ["Salmon", "Regular", 0.0],
        ["Dragon", "Premium", 3.0],
        ["Eel", "Regular", 0.5],
    ]
    assert sides["categories"]["sauce"] == [{"name": "Eel", "type": "Regular", "price": 0.5}]
    assert list(sides["categories"]) == ["rolls", "sauce"]
    assert additions == ["Edamame", 4.0]
    assert quantity == "2"
    assert total == (48 + 3 + 0.5 + 4) * 2


def test_zero_priced_item_is_routed_to_detail_page():
    cart = RecordingCart()
    options = decode_item_options({"sizes": ["Regular"]})
    result = attempt_add_to_cart("Chef's Special", "/menu/chefs-special", options, SelectionState.for_options(options), cart)
    assert result == OpenDetailPage(url="/menu/chefs-special")
    assert cart.commits == []


def test_validation_runs_before_price_check():
    options = decode_item_options(
        {"side_categories": [{"category_name": "rolls", "items": ["A", "Regular", 0], "config": [1, 1, 0, 1, 1, 0, 0, 0, 0]}]}
    )
    result = attempt_add_to_cart("X", "/x", options, SelectionState.for_options(options), RecordingCart())
    assert isinstance(result, ValidationFailure)


def test_flavour_scenario_prices_follow_selection():
    cart = RecordingCart()
    options = decode_item_options({"flavours": ["Vanilla", "Chocolate"], "items": [["-", "Vanilla", 5], ["-", "Chocolate", 6]]})
    session = ItemSession.start("Ice Cream", "/menu/ice-cream", options)

    assert session.state.selected_size == "-"
    assert session.unit_price() == 5

    session.select_flavour("Chocolate")
    session.adjust_quantity(1)
    assert session.unit_price() == 6
    assert session.total() == 12

    result = session.add_to_cart(cart)
    assert isinstance(result, CartEntry)
    assert result.size == "Chocolate"
    assert result.sides == {"items": [], "categories": {}}
    assert result.additions == []


def test_payload_builders_on_empty_selection():
    options = _platter_options()
    state = SelectionState.for_options(options)
    assert build_sides_payload(options, state) == {"items": [], "categories": {}}
    assert build_additions_payload(options, state) == []
