"""
Error kinds raised by the ship service layer.

Both errors are terminal for the current request.  The HTTP layer maps
``ValidationError`` to 400 and ``NotFoundError`` to 404.
"""


class ShipServiceError(Exception):
    """Base class for errors raised by the service layer."""


class ValidationError(ShipServiceError):
    """Input is missing, malformed or outside its allowed range."""


class NotFoundError(ShipServiceError):
    """The requested ship does not exist."""

    def __init__(self, ship_id: int) -> None:
        super().__init__(f"Ship {ship_id} not found")
        self.ship_id = ship_id
