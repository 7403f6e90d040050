"""
Booking endpoints. All routes require a bearer token.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.db.session import get_db
from hotel_booking.schemas.booking import BookingCreate, BookingIdResponse, BookingResponse
from hotel_booking.services.booking_service import create_booking, find_booking, update_booking
from hotel_booking.core.security import get_current_user_id

router = APIRouter(prefix="/booking", tags=["Bookings"])


@router.get("", response_model=BookingResponse)
async def get_booking(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Current booking of the authenticated user, with its room."""
    return await find_booking(db, user_id)


@router.post("", response_model=BookingIdResponse)
async def post_booking(
    booking_data: BookingCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Book a room.

    403 when the user is not enrolled, holds no paid in-person ticket with
    hotel, or the room is full; 404 when the room does not exist.
    """
    booking = await create_booking(db, user_id, booking_data.room_id)
    return BookingIdResponse(booking_id=booking.id)


@router.put("/{booking_id}", response_model=BookingIdResponse)
async def put_booking(
    booking_id: int,
    booking_data: BookingCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Move the user's booking to another room."""
    booking = await update_booking(db, booking_id, user_id, booking_data.room_id)
    return BookingIdResponse(booking_id=booking.id)
