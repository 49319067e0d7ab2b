"""
Filtering, sorting and pagination of ship collections.

Filters are combined into a single conjunction that is evaluated once
per ship.  Sorting is stable and ascending; unknown sort fields fall
back to ``id`` the same way the other list endpoints ignore unknown
``sort_by`` values.
"""

import logging
from operator import attrgetter
from typing import Callable, Iterable, List, Optional, Union

from ..core.exceptions import ValidationError
from ..schemas.ship import Ship, ShipCriteria, ShipOrder, to_epoch_millis

logger = logging.getLogger(__name__)

DEFAULT_PAGE_NUMBER = 0
DEFAULT_PAGE_SIZE = 3

# JSON field name -> attribute used as the sort key.
SORT_FIELDS = {
    "id": "id",
    "speed": "speed",
    "prodDate": "prod_date",
    "rating": "rating",
}

Predicate = Callable[[Ship], bool]


def build_predicates(criteria: ShipCriteria) -> List[Predicate]:
    """Return one predicate per filter that is set on ``criteria``."""
    c = criteria
    predicates: List[Predicate] = []
    if c.name is not None:
        predicates.append(lambda ship: c.name in ship.name)
    if c.planet is not None:
        predicates.append(lambda ship: c.planet in ship.planet)
    if c.ship_type is not None:
        predicates.append(lambda ship: ship.ship_type == c.ship_type)
    if c.after is not None:
        predicates.append(lambda ship: to_epoch_millis(ship.prod_date) > c.after)
    if c.before is not None:
        predicates.append(lambda ship: to_epoch_millis(ship.prod_date) < c.before)
    if c.is_used is not None:
        predicates.append(lambda ship: ship.is_used == c.is_used)
    if c.min_speed is not None:
        predicates.append(lambda ship: ship.speed >= c.min_speed)
    if c.max_speed is not None:
        predicates.append(lambda ship: ship.speed <= c.max_speed)
    if c.min_crew_size is not None:
        predicates.append(lambda ship: ship.crew_size >= c.min_crew_size)
    if c.max_crew_size is not None:
        predicates.append(lambda ship: ship.crew_size <= c.max_crew_size)
    if c.min_rating is not None:
        predicates.append(lambda ship: ship.rating >= c.min_rating)
    if c.max_rating is not None:
        predicates.append(lambda ship: ship.rating <= c.max_rating)
    return predicates


def filter_ships(ships: Iterable[Ship], criteria: Optional[ShipCriteria] = None) -> List[Ship]:
    """Return the ships matching every filter set on ``criteria``, in input order."""
    if criteria is None:
        return list(ships)
    predicates = build_predicates(criteria)
    return [ship for ship in ships if all(p(ship) for p in predicates)]


def sort_key(order: Union[ShipOrder, str, None]) -> Callable[[Ship], object]:
    """Key function for ``order``, given as a ``ShipOrder`` or a JSON field name."""
    field_name = order.field_name if isinstance(order, ShipOrder) else order
    if field_name is None:
        return attrgetter("id")
    attribute = SORT_FIELDS.get(field_name)
    if attribute is None:
        logger.debug("Unknown sort field %r, sorting by id", field_name)
        return attrgetter("id")
    return attrgetter(attribute)


def paginate(
    ships: Iterable[Ship],
    order: Union[ShipOrder, str, None] = None,
    page_number: Optional[int] = None,
    page_size: Optional[int] = None,
) -> List[Ship]:
    """Sort ``ships`` ascending by ``order`` and return one page.

    ``page_number`` defaults to 0 and ``page_size`` to 3.  A page past
    the end of the collection is empty.
    """
    page_number = DEFAULT_PAGE_NUMBER if page_number is None else page_number
    page_size = DEFAULT_PAGE_SIZE if page_size is None else page_size
    if page_number < 0 or page_size < 0:
        raise ValidationError("pageNumber and pageSize must not be negative")

    start = page_number * page_size
    return sorted(ships, key=sort_key(order))[start:start + page_size]
