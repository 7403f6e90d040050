from hotel_booking.schemas.booking import BookingCreate, BookingIdResponse, BookingResponse, RoomResponse

__all__ = [
    "BookingCreate", "BookingIdResponse", "BookingResponse", "RoomResponse",
]
