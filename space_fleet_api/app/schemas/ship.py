"""
Pydantic models for ship data.

``ShipPayload`` is the request body for both creation and partial
updates: every field is optional so that presence and range checks
happen in the service layer (a missing field is a 400, not a schema
error).  ``Ship`` is the stored entity returned by the API.  JSON
field names are camelCase (``shipType``, ``prodDate``, ``isUsed``,
``crewSize``); production dates travel as epoch milliseconds.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


class ShipType(str, Enum):
    TRANSPORT = "TRANSPORT"
    MILITARY = "MILITARY"
    MERCHANT = "MERCHANT"


class ShipOrder(str, Enum):
    """Sort order accepted by the list endpoint (``?order=SPEED``)."""

    ID = "ID"
    SPEED = "SPEED"
    DATE = "DATE"
    RATING = "RATING"

    @property
    def field_name(self) -> str:
        return {
            ShipOrder.ID: "id",
            ShipOrder.SPEED: "speed",
            ShipOrder.DATE: "prodDate",
            ShipOrder.RATING: "rating",
        }[self]


def to_epoch_millis(value: datetime) -> int:
    """Epoch milliseconds of a naive local (or aware) datetime."""
    return round(value.timestamp() * 1000)


def from_epoch_millis(value: int) -> datetime:
    """Naive datetime in the system's local time zone."""
    seconds, millis = divmod(int(value), 1000)
    return datetime.fromtimestamp(seconds) + timedelta(milliseconds=millis)


def _parse_prod_date(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return from_epoch_millis(value)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"prodDate {value!r} is not a representable timestamp") from e
    return value


def _to_local_naive(value: datetime) -> datetime:
    # Years are judged in local time, so aware values are converted once here.
    if value.tzinfo is None:
        return value
    try:
        return value.astimezone().replace(tzinfo=None)
    except (OverflowError, OSError) as e:
        raise ValueError(f"prodDate {value.isoformat()} is out of range") from e


ProdDate = Annotated[
    datetime,
    BeforeValidator(_parse_prod_date),
    AfterValidator(_to_local_naive),
    PlainSerializer(to_epoch_millis, return_type=int, when_used="json"),
]


class ShipPayload(BaseModel):
    """Request body for creating or updating a ship.

    ``rating`` and ``id`` are server-controlled and ignored if sent.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    planet: Optional[str] = None
    ship_type: Optional[ShipType] = None
    prod_date: Optional[ProdDate] = None
    is_used: Optional[bool] = None
    speed: Optional[float] = None
    crew_size: Optional[int] = None


class Ship(BaseModel):
    """A stored ship.  ``id`` is ``None`` only before the first save."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: Optional[int] = None
    name: str
    planet: str
    ship_type: ShipType
    prod_date: ProdDate
    is_used: bool = False
    speed: float
    crew_size: int
    rating: float = 0.0


class ShipCriteria(BaseModel):
    """Optional filters for listing and counting ships.

    ``after`` and ``before`` are epoch milliseconds.  Unset filters
    have no effect.
    """

    name: Optional[str] = None
    planet: Optional[str] = None
    ship_type: Optional[ShipType] = None
    after: Optional[int] = None
    before: Optional[int] = None
    is_used: Optional[bool] = None
    min_speed: Optional[float] = None
    max_speed: Optional[float] = None
    min_crew_size: Optional[int] = None
    max_crew_size: Optional[int] = None
    min_rating: Optional[float] = None
    max_rating: Optional[float] = None
