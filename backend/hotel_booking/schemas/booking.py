"""
Pydantic schemas for booking-related request/response validation.

Wire format is camelCase (roomId, bookingId, createdAt, ...); the embedded
room of a booking is published under the key "Room".
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class BookingCreate(_CamelModel):
    room_id: int = Field(..., ge=1)


class BookingIdResponse(_CamelModel):
    booking_id: int


class RoomResponse(_CamelModel):
    id: int
    name: str
    capacity: int
    hotel_id: int
    created_at: datetime
    updated_at: datetime


class BookingResponse(_CamelModel):
    id: int
    user_id: int
    room_id: int
    created_at: datetime
    updated_at: datetime
    room: RoomResponse = Field(..., alias="Room")
