"""Editable demo menu rendered when no remote menu is configured."""

from __future__ import annotations

from typing import Any

# Each card mirrors what a rendered menu page carries: title, link, price text,
# the visible size/flavour lists and the data-* option snapshots.
DEMO_MENU_CARDS: list[dict[str, Any]] = [
    {
        "id": "sushi_platter",
        "name": "Sushi Party Platter",
        "url": "/menu/sushi-party-platter",
        "price_text": "$32",
        "description": "Chef's selection of nigiri with your choice of three rolls.",
        "sizes": ["Small", "Large"],
        "flavours": [],
        "prices_array": ["Small", "-", 32, "Large", "-", 48],
        "side_categories": [
            {
                "category_name": "rolls",
                "display_name": "Rolls",
                "items": [
                    "California", "Regular", 0,
                    "Spicy Tuna", "Regular", 0,
                    "Salmon Avocado", "Regular", 0,
                    "Dragon", "Premium", 3,
                    "Rainbow", "Premium", 3.5,
                ],
                "config": [3, 3, 0, 3, 3, 0, 0, 0, 0],
            },
        ],
        "additions": ["Extra Wasabi", 0.5, "Miso Soup", 3, "Edamame", 4],
        "images": ["images/sushi-platter.jpg", {"image": "images/sushi-platter-2.jpg"}],
    },
    {
        "id": "ramen_bowl",
        "name": "Ramen Bowl",
        "url": "/menu/ramen-bowl",
        "price_text": "$15",
        "description": "Slow-cooked broth, noodles, chashu and scallions.",
        "sizes": ["Regular", "Large"],
        "flavours": ["Mild", "Spicy"],
        "prices_array": [
            {"size": "Regular", "flavour": "Mild", "price": 15},
            {"size": "Regular", "flavour": "Spicy", "price": 15.5},
            {"size": "Large", "flavour": "Mild", "price": 18},
            {"size": "Large", "flavour": "Spicy", "price": 18.5},
        ],
        "side_categories": [
            {
                "category_name": "broth",
                "display_name": "Broth",
                "items": [["Tonkotsu", "Regular", 0], ["Shoyu", "Regular", 0], ["Black Garlic", "Premium", 1.5]],
                "config": {"all_max": 1, "regular_max": 1},
            },
            {
                "category_name": "toppings",
                "display_name": "Toppings",
                "items": [
                    {"name": "Corn", "type": "Regular", "price": 0.75},
                    {"name": "Bamboo Shoots", "type": "Regular", "price": 0.75},
                    {"name": "Nori", "type": "Regular", "price": 0.5},
                ],
                "config": [0, 0, 0, 0, 0, 0, 0, 0, 0],
            },
        ],
        "additions": [["Soft Egg", 1.5], ["Extra Chashu", 3]],
        "images": ["images/ramen.jpg"],
    },
    {
        "id": "ice_cream",
        "name": "Ice Cream",
        "url": "/menu/ice-cream",
        "price_text": "$5",
        "description": "Two scoops, made in house.",
        "sizes": [],
        "flavours": ["Vanilla", "Chocolate"],
        "prices_array": [["-", "Vanilla", 5], ["-", "Chocolate", 6]],
        "side_categories": [],
        "additions": ["Sprinkles", 0.5, "Hot Fudge", 1],
        "images": [],
    },
    {
        "id": "bento_box",
        "name": "Bento Box",
        "url": "/menu/bento-box",
        "price_text": "$14",
        "description": "Rice, salad, pickles and a main of the day.",
        "sizes": ["Regular", "Large"],
        "flavours": [],
    },
    {
        "id": "miso_soup",
        "name": "Miso Soup",
        "url": "/menu/miso-soup",
        "price_text": "$4.50",
        "description": "Tofu, wakame and scallion.",
    },
    {
        "id": "chefs_special",
        "name": "Chef's Special",
        "url": "/menu/chefs-special",
        "price_text": "Market price",
        "description": "Ask about today's special.",
    },
]
