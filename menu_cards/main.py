"""Entry point for the menu-cards Textual app."""

from __future__ import annotations

import argparse
import logging

from textual.logging import TextualHandler

from menu_cards.config import DB_PATH, FETCH_TIMEOUT_SECONDS, LOG_LEVEL, MENU_BASE_URL
from menu_cards.loader import OptionLoader
from menu_cards.menu_app import MenuApp
from menu_cards.persistence import SqliteCart


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse menu item cards and build a cart.")
    parser.add_argument("--base-url", default=MENU_BASE_URL, help="Site root that item urls are fetched from")
    parser.add_argument("--db", default=DB_PATH, help="SQLite file that holds the cart")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    """Send log records to the Textual devtools console."""
    logging.basicConfig(level=level.upper(), handlers=[TextualHandler()], force=True)


def main(argv: list[str] | None = None) -> None:
    """Run the Textual application."""
    args = parse_args(argv)
    configure_logging(args.log_level)
    MenuApp(
        loader=OptionLoader(base_url=args.base_url, timeout=FETCH_TIMEOUT_SECONDS),
        cart=SqliteCart(args.db),
    ).run()


if __name__ == "__main__":
    main()
