"""
Booking Store: durable CRUD for bookings plus room lookups.

Room occupancy is always read from the bookings table. `find_room` uses
populate_existing so a room already in the session's identity map still gets
its bookings re-fetched, and `for_update=True` takes a row lock on the room
(rendered as nothing on SQLite, where the whole transaction is IMMEDIATE).
"""

from typing import Optional

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel_booking.core.exceptions import NotFoundError
from hotel_booking.core.metrics import record_db_operation
from hotel_booking.models.booking import Booking
from hotel_booking.models.hotel import Room


async def find_by_user(db: AsyncSession, user_id: int) -> Optional[Booking]:
    """Current booking of a user, with its room. Oldest wins if there are several."""
    record_db_operation("read")
    result = await db.execute(
        select(Booking)
        .where(Booking.user_id == user_id)
        .options(selectinload(Booking.room))
        .order_by(Booking.id.asc())
        .limit(1)
    )
    return result.scalar_one_or_none()


def room_query(room_id: int, for_update: bool = False) -> Select:
    query = (
        select(Room)
        .where(Room.id == room_id)
        .options(selectinload(Room.bookings))
        .execution_options(populate_existing=True)
    )
    if for_update:
        query = query.with_for_update()
    return query


async def find_room(db: AsyncSession, room_id: int, for_update: bool = False) -> Optional[Room]:
    """Room with its current bookings, optionally row-locked for the transaction."""
    record_db_operation("lock" if for_update else "read")
    result = await db.execute(room_query(room_id, for_update))
    return result.scalar_one_or_none()


async def insert(db: AsyncSession, user_id: int, room_id: int) -> Booking:
    record_db_operation("write")
    booking = Booking(user_id=user_id, room_id=room_id)
    db.add(booking)
    await db.flush()
    await db.refresh(booking)
    return booking


async def update_room(db: AsyncSession, booking_id: int, room_id: int) -> Booking:
    """Move a booking to another room. Raises NotFoundError for an unknown booking."""
    booking = await db.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError(f"Booking {booking_id} not found")

    record_db_operation("write")
    booking.room_id = room_id
    await db.flush()
    await db.refresh(booking)
    return booking
