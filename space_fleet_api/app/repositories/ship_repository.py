"""
SQLite-backed storage for ships.

The repository works on a connection owned by the caller and never
commits; the service decides where a transaction starts and ends.
"""

from __future__ import annotations

import sqlite3
from typing import List, Optional

from ..schemas.ship import Ship, ShipType, from_epoch_millis, to_epoch_millis

_COLUMNS = "id, name, planet, ship_type, prod_date, is_used, speed, crew_size, rating"


class ShipRepository:
    """Repository for CRUD operations on ships."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def save(self, ship: Ship) -> Ship:
        """Insert ``ship`` if it has no id, otherwise overwrite its row.

        Returns the stored ship; on insert this is a copy carrying the
        assigned id.
        """
        values = (
            ship.name,
            ship.planet,
            ship.ship_type.value,
            to_epoch_millis(ship.prod_date),
            int(ship.is_used),
            ship.speed,
            ship.crew_size,
            ship.rating,
        )
        if ship.id is None:
            cursor = self._conn.execute(
                """
                INSERT INTO ships (name, planet, ship_type, prod_date, is_used, speed, crew_size, rating)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                values,
            )
            return ship.model_copy(update={"id": cursor.lastrowid})
        self._conn.execute(
            """
            UPDATE ships
            SET name = ?, planet = ?, ship_type = ?, prod_date = ?, is_used = ?, speed = ?, crew_size = ?, rating = ?
            WHERE id = ?
            """,
            values + (ship.id,),
        )
        return ship

    def find_by_id(self, ship_id: int) -> Optional[Ship]:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM ships WHERE id = ?", (ship_id,)
        ).fetchone()
        if not row:
            return None
        return self._row_to_ship(row)

    def exists_by_id(self, ship_id: int) -> bool:
        row = self._conn.execute("SELECT 1 FROM ships WHERE id = ?", (ship_id,)).fetchone()
        return row is not None

    def delete_by_id(self, ship_id: int) -> None:
        self._conn.execute("DELETE FROM ships WHERE id = ?", (ship_id,))

    def find_all(self) -> List[Ship]:
        rows = self._conn.execute(f"SELECT {_COLUMNS} FROM ships ORDER BY id").fetchall()
        return [self._row_to_ship(row) for row in rows]

    @staticmethod
    def _row_to_ship(row: sqlite3.Row) -> Ship:
        """Convert a database row to a ``Ship``."""
        return Ship(
            id=row["id"],
            name=row["name"],
            planet=row["planet"],
            ship_type=ShipType(row["ship_type"]),
            prod_date=from_epoch_millis(row["prod_date"]),
            is_used=bool(row["is_used"]),
            speed=row["speed"],
            crew_size=row["crew_size"],
            rating=row["rating"],
        )
