"""
Domain errors raised by the booking service.

Every error carries a BookingErrorKind. The set of kinds is closed; the API
layer translates each kind to a status code in exactly one place
(hotel_booking.api.exception_handlers).
"""

from enum import Enum


class BookingErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    NOT_ELIGIBLE = "not_eligible"
    ROOM_FULL = "room_full"
    VALIDATION = "validation"


class BookingError(Exception):
    kind: BookingErrorKind

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(BookingError):
    """Booking, room or other requested record does not exist."""

    kind = BookingErrorKind.NOT_FOUND

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class CannotBookError(BookingError):
    """User is not allowed to book: enrollment, ticket or ownership check failed."""

    kind = BookingErrorKind.NOT_ELIGIBLE

    def __init__(self, message: str = "Cannot create booking"):
        super().__init__(message)


class RoomFullError(CannotBookError):
    """Target room has no free capacity left."""

    kind = BookingErrorKind.ROOM_FULL

    def __init__(self, message: str = "Room is full"):
        super().__init__(message)
