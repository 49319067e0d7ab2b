"""
Validation, rating and partial-update rules for ships.

These functions hold no state and never touch the database, so the
service layer can call them before opening a transaction and tests can
exercise each rule in isolation.

Field limits:

- ``name`` and ``planet``: 1 to 50 characters.
- ``prod_date``: local calendar year between 2800 and 3019.
- ``speed``: 0.01 to 0.99, stored with two decimals.
- ``crew_size``: 1 to 9999.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from ..core.exceptions import ValidationError
from ..schemas.ship import Ship, ShipPayload

MAX_TEXT_LENGTH = 50
MIN_PROD_YEAR = 2800
CURRENT_YEAR = 3019
MIN_SPEED = 0.01
MAX_SPEED = 0.99
MIN_CREW_SIZE = 1
MAX_CREW_SIZE = 9999


def is_valid_text(value: Optional[str]) -> bool:
    return value is not None and 0 < len(value) <= MAX_TEXT_LENGTH


def is_valid_prod_date(value: Optional[datetime]) -> bool:
    return value is not None and MIN_PROD_YEAR <= value.year <= CURRENT_YEAR


def is_valid_speed(value: Optional[float]) -> bool:
    return value is not None and MIN_SPEED <= value <= MAX_SPEED


def is_valid_crew_size(value: Optional[int]) -> bool:
    return value is not None and MIN_CREW_SIZE <= value <= MAX_CREW_SIZE


def validate(ship: ShipPayload) -> bool:
    """Return ``True`` if ``ship`` carries every field needed to create it."""
    return (
        is_valid_text(ship.name)
        and is_valid_text(ship.planet)
        and is_valid_prod_date(ship.prod_date)
        and is_valid_speed(ship.speed)
        and is_valid_crew_size(ship.crew_size)
        and ship.ship_type is not None
    )


def round_half_up(value: float, digits: int = 2) -> float:
    """Round halves away from zero for positive values (``round`` is banker's)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def compute_rating(ship: Any) -> float:
    """Rating from speed, used status and production year.

    ``80 * speed * k / (3019 - year + 1)`` where ``k`` is 0.5 for used
    ships and 1 otherwise, rounded to two decimals.
    """
    year = ship.prod_date.year
    used_factor = 0.5 if ship.is_used else 1.0
    rating = (80 * ship.speed * used_factor) / (CURRENT_YEAR - year + 1)
    return round_half_up(rating)


@dataclass(frozen=True)
class FieldRule:
    """Copy ``field`` from an update payload, checking it first if ``check`` is set."""

    field: str
    alias: str
    check: Optional[Callable[[Any], bool]] = None

    def stage(self, payload: ShipPayload, changes: dict) -> None:
        value = getattr(payload, self.field)
        if value is None:
            return
        if self.check is not None and not self.check(value):
            raise ValidationError(f"Invalid value for '{self.alias}'")
        changes[self.field] = value


# Applied in this order; shipType and isUsed accept any non-null value.
FIELD_RULES = (
    FieldRule("name", "name", is_valid_text),
    FieldRule("planet", "planet", is_valid_text),
    FieldRule("ship_type", "shipType"),
    FieldRule("prod_date", "prodDate", is_valid_prod_date),
    FieldRule("is_used", "isUsed"),
    FieldRule("speed", "speed", is_valid_speed),
    FieldRule("crew_size", "crewSize", is_valid_crew_size),
)


def apply_update(ship: Ship, payload: ShipPayload) -> Ship:
    """Return a copy of ``ship`` with the present payload fields applied.

    Raises ``ValidationError`` on the first present field that fails its
    check.  ``ship`` itself is left untouched.  The rating is recomputed
    from the merged values.
    """
    changes: dict = {}
    for rule in FIELD_RULES:
        rule.stage(payload, changes)
    if "speed" in changes:
        changes["speed"] = round_half_up(changes["speed"])
    updated = ship.model_copy(update=changes)
    updated.rating = compute_rating(updated)
    return updated
