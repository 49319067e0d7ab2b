"""
Business logic for ships.

``ShipService`` ties the pure rules in ``ship_rules`` and
``ship_query`` to SQLite storage.  Each call opens its own connection
and closes it before returning.  Mutations run inside a transaction so
that a failed validation or a missing row leaves the store unchanged.
"""

import logging
from typing import List, Optional, Union

from ..core.db import get_connection, immediate_transaction
from ..core.exceptions import NotFoundError, ValidationError
from ..repositories.ship_repository import ShipRepository
from ..schemas.ship import Ship, ShipCriteria, ShipOrder, ShipPayload
from .ship_query import filter_ships, paginate
from .ship_rules import apply_update, compute_rating, round_half_up, validate

logger = logging.getLogger(__name__)


class ShipService:
    """Service class for managing ships."""

    @classmethod
    async def create_ship(cls, payload: ShipPayload) -> Ship:
        """Validate ``payload``, derive the rating and store a new ship.

        ``isUsed`` defaults to ``False`` and speed is rounded to two
        decimals.  Raises ``ValidationError`` if any required field is
        missing or out of range.
        """
        if not validate(payload):
            raise ValidationError("Ship is missing a required field or has a value out of range")
        ship = Ship(
            name=payload.name,
            planet=payload.planet,
            ship_type=payload.ship_type,
            prod_date=payload.prod_date,
            is_used=payload.is_used if payload.is_used is not None else False,
            speed=round_half_up(payload.speed),
            crew_size=payload.crew_size,
        )
        ship.rating = compute_rating(ship)
        conn = get_connection()
        try:
            with immediate_transaction(conn):
                stored = ShipRepository(conn).save(ship)
            logger.info("Created ship %s '%s'", stored.id, stored.name)
            return stored
        finally:
            conn.close()

    @classmethod
    async def get_ship(cls, ship_id: int) -> Ship:
        """Retrieve a single ship by ID.  Raises ``NotFoundError`` if absent."""
        conn = get_connection()
        try:
            ship = ShipRepository(conn).find_by_id(ship_id)
            if ship is None:
                raise NotFoundError(ship_id)
            return ship
        finally:
            conn.close()

    @classmethod
    async def update_ship(cls, payload: Optional[ShipPayload], ship_id: int) -> Ship:
        """Apply the fields present in ``payload`` to ship ``ship_id``.

        Only provided fields are validated and copied; omitted fields
        keep their stored values.  The rating is recomputed afterwards.
        Reading, applying and saving happen in one transaction.

        Raises ``NotFoundError`` if the ship does not exist and
        ``ValidationError`` if the payload is missing or a present
        field is out of range.
        """
        conn = get_connection()
        try:
            with immediate_transaction(conn):
                repository = ShipRepository(conn)
                current = repository.find_by_id(ship_id)
                if current is None:
                    raise NotFoundError(ship_id)
                if payload is None:
                    raise ValidationError("Update payload is empty")
                stored = repository.save(apply_update(current, payload))
            logger.info("Updated ship %s", ship_id)
            return stored
        finally:
            conn.close()

    @classmethod
    async def delete_ship(cls, ship_id: int) -> None:
        """Delete a ship.  Raises ``NotFoundError`` if it does not exist."""
        conn = get_connection()
        try:
            with immediate_transaction(conn):
                repository = ShipRepository(conn)
                if not repository.exists_by_id(ship_id):
                    raise NotFoundError(ship_id)
                repository.delete_by_id(ship_id)
            logger.info("Deleted ship %s", ship_id)
        finally:
            conn.close()

    @classmethod
    async def list_ships(
        cls,
        criteria: Optional[ShipCriteria] = None,
        order: Union[ShipOrder, str, None] = None,
        page_number: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> List[Ship]:
        """Return one sorted page of the ships matching ``criteria``.

        - ``order``: sort field, ``id`` when omitted or unknown.
        - ``page_number`` / ``page_size``: default to 0 and 3.
        """
        ships = await cls._find_matching(criteria)
        return paginate(ships, order, page_number, page_size)

    @classmethod
    async def count_ships(cls, criteria: Optional[ShipCriteria] = None) -> int:
        """Return how many ships match ``criteria``."""
        ships = await cls._find_matching(criteria)
        return len(ships)

    @classmethod
    async def _find_matching(cls, criteria: Optional[ShipCriteria]) -> List[Ship]:
        conn = get_connection()
        try:
            ships = ShipRepository(conn).find_all()
        finally:
            conn.close()
        return filter_ships(ships, criteria)
