"""Runtime configuration defaults for the cart store and option fetching."""

from __future__ import annotations

import os


def env_float(name: str, default: float) -> float:
    """Read a positive float from the environment, keeping ``default`` on bad input."""
    raw = os.environ.get(name, "").strip()
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


DB_PATH = os.environ.get("MENU_CARDS_DB_PATH", "").strip() or "data/cart.db"

# Item urls without a scheme are joined onto this; empty means markup-only.
MENU_BASE_URL = os.environ.get("MENU_CARDS_BASE_URL", "").strip()

FETCH_TIMEOUT_SECONDS = env_float("MENU_CARDS_FETCH_TIMEOUT", 5.0)

LOG_LEVEL = os.environ.get("MENU_CARDS_LOG_LEVEL", "").strip().upper() or "WARNING"
