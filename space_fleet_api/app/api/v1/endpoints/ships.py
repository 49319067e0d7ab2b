"""
Ship endpoints for API v1.

These routes expose CRUD operations plus filtered listing and counting
of ships.  Handlers only parse the request and translate service
errors to HTTP status codes; all rules live in ``ShipService``.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status

from space_fleet_api.app.core.exceptions import NotFoundError, ValidationError
from space_fleet_api.app.schemas.ship import Ship, ShipCriteria, ShipOrder, ShipPayload, ShipType
from space_fleet_api.app.services.ship_service import ShipService

router = APIRouter()

# Largest value SQLite can store in an INTEGER column.
MAX_SHIP_ID = 2 ** 63 - 1


def ship_criteria(
    name: Optional[str] = Query(None),
    planet: Optional[str] = Query(None),
    ship_type: Optional[ShipType] = Query(None, alias="shipType"),
    after: Optional[int] = Query(None, description="Produced strictly after this epoch millisecond"),
    before: Optional[int] = Query(None, description="Produced strictly before this epoch millisecond"),
    is_used: Optional[bool] = Query(None, alias="isUsed"),
    min_speed: Optional[float] = Query(None, alias="minSpeed"),
    max_speed: Optional[float] = Query(None, alias="maxSpeed"),
    min_crew_size: Optional[int] = Query(None, alias="minCrewSize"),
    max_crew_size: Optional[int] = Query(None, alias="maxCrewSize"),
    min_rating: Optional[float] = Query(None, alias="minRating"),
    max_rating: Optional[float] = Query(None, alias="maxRating"),
) -> ShipCriteria:
    """Collect the list/count query filters into a ``ShipCriteria``."""
    return ShipCriteria(
        name=name,
        planet=planet,
        ship_type=ship_type,
        after=after,
        before=before,
        is_used=is_used,
        min_speed=min_speed,
        max_speed=max_speed,
        min_crew_size=min_crew_size,
        max_crew_size=max_crew_size,
        min_rating=min_rating,
        max_rating=max_rating,
    )


def valid_ship_id(raw_id: str) -> int:
    """Parse a path id, rejecting anything but a positive 64-bit integer with 400."""
    if not (raw_id.isascii() and raw_id.isdigit()) or not 0 < int(raw_id) <= MAX_SHIP_ID:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid ship id '{raw_id}'",
        )
    return int(raw_id)


@router.get("", response_model=List[Ship])
async def list_ships(
    criteria: ShipCriteria = Depends(ship_criteria),
    order: Optional[ShipOrder] = Query(None),
    page_number: Optional[int] = Query(None, alias="pageNumber"),
    page_size: Optional[int] = Query(None, alias="pageSize"),
) -> List[Ship]:
    """Return one page of ships matching the filters.

    - **order**: `ID`, `SPEED`, `DATE` or `RATING`; ascending, `ID` by default.
    - **pageNumber**, **pageSize**: default to 0 and 3.
    """
    try:
        return await ShipService.list_ships(criteria, order, page_number, page_size)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.get("/count", response_model=int)
async def count_ships(criteria: ShipCriteria = Depends(ship_criteria)) -> int:
    """Return the number of ships matching the filters."""
    return await ShipService.count_ships(criteria)


@router.get("/{ship_id}", response_model=Ship)
async def get_ship(ship_id: str) -> Ship:
    """Retrieve a single ship by its ID.  Raises 404 if not found."""
    try:
        return await ShipService.get_ship(valid_ship_id(ship_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("", response_model=Ship)
async def create_ship(payload: ShipPayload) -> Ship:
    """Create a ship.

    All fields except `isUsed` are required; `rating` is computed by
    the server and ignored if sent.
    """
    try:
        return await ShipService.create_ship(payload)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.post("/{ship_id}", response_model=Ship)
@router.put("/{ship_id}", response_model=Ship)
async def update_ship(
    ship_id: str,
    payload: Optional[ShipPayload] = Body(None),
) -> Ship:
    """Update an existing ship.

    Partial updates are supported; any unspecified fields remain
    unchanged.  Both ``POST`` and ``PUT`` are accepted.
    """
    try:
        return await ShipService.update_ship(payload, valid_ship_id(ship_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.delete("/{ship_id}")
async def delete_ship(ship_id: str) -> Response:
    """Delete a ship.  Raises 404 if not found."""
    try:
        await ShipService.delete_ship(valid_ship_id(ship_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return Response(status_code=status.HTTP_200_OK)
