"""SQLite-backed cart that receives validated add-to-cart commits."""

from __future__ import annotations

import json
import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from menu_cards.config import DB_PATH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartLine:
    """One committed cart line as stored."""

    line_id: int
    created_at: str
    name: str
    size: str
    sides: dict
    additions: list
    quantity: str
    total_cost: float


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SqliteCart:
    """Cart store; satisfies the ``CartBridge`` protocol."""

    def __init__(self, db_path: str | Path = DB_PATH) -> None:
        self.db_path = Path(db_path)
        self._bootstrapped = False

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        if not self._bootstrapped:
            self._bootstrap_schema(conn)
            self._bootstrapped = True
        return conn

    def _bootstrap_schema(self, conn: sqlite3.Connection) -> None:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS cart_lines (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                created_at TEXT NOT NULL,
                item_name TEXT NOT NULL,
                size_label TEXT NOT NULL,
                sides_json TEXT NOT NULL,
                additions_json TEXT NOT NULL,
                quantity TEXT NOT NULL,
                total_cost REAL NOT NULL
            );
            """
        )

    def commit(
        self,
        name: str,
        size: str,
        sides: dict,
        additions: list,
        quantity: str,
        total_cost: float,
    ) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO cart_lines
                    (created_at, item_name, size_label, sides_json, additions_json, quantity, total_cost)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (_utc_now_iso(), name, size, json.dumps(sides), json.dumps(additions), quantity, total_cost),
            )
        logger.debug("cart_commit name=%r size=%r quantity=%s", name, size, quantity)

    def lines(self) -> list[CartLine]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT id, created_at, item_name, size_label, sides_json, additions_json, quantity, total_cost
                FROM cart_lines
                ORDER BY id
                """
            ).fetchall()
        return [
            CartLine(
                line_id=row[0],
                created_at=row[1],
                name=row[2],
                size=row[3],
                sides=json.loads(row[4]),
                additions=json.loads(row[5]),
                quantity=row[6],
                total_cost=row[7],
            )
            for row in rows
        ]

    def item_count(self) -> int:
        """Total quantity across all lines."""
        return sum(int(line.quantity) for line in self.lines())

    def clear(self) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM cart_lines")
