"""
Booking service: find, create and update a user's hotel booking.

CONCURRENCY STRATEGY: Lock the room, then count
===============================================

Problem:
  Two users ask for the last free place in a room simultaneously.
  Both count occupancy = capacity - 1, both pass validation, both insert.
  Result: Overbooking.

Solution:
  The room is loaded with `for_update=True` inside the request's transaction,
  and its bookings are counted only after the lock is held.

  - PostgreSQL: SELECT ... FOR UPDATE on the room row. The second writer
    blocks until the first commits, then re-counts under READ COMMITTED and
    sees the new booking.
  - SQLite: every transaction is BEGIN IMMEDIATE (see db.session), so the
    second writer cannot even start reading until the first commits.

  Occupancy is never stored or cached; it is len(room.bookings), re-read on
  every call. The write is committed here, before the route returns, so a
  failed commit surfaces as an error and never as a booking id; committing
  also releases the lock.

Known behaviours kept on purpose:
  - create does not check whether the user already has a booking.
  - update counts the moving booking itself, so a same-room update on a
    full room is denied as ROOM_FULL.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from hotel_booking.core.exceptions import CannotBookError, NotFoundError, RoomFullError
from hotel_booking.core.logging import get_logger
from hotel_booking.core.metrics import booking_latency, record_booking_attempt
from hotel_booking.models.booking import Booking
from hotel_booking.repositories import booking_repository, enrollment_repository
from hotel_booking.services.booking_validator import BookingDecision, DenyReason, validate_booking, validate_room

logger = get_logger(__name__)

_ERROR_FOR_REASON = {
    DenyReason.NOT_ELIGIBLE: CannotBookError,
    DenyReason.ROOM_NOT_FOUND: NotFoundError,
    DenyReason.ROOM_FULL: RoomFullError,
}


def _raise_for_decision(decision: BookingDecision, operation: str, **context) -> None:
    if decision.allowed:
        return

    logger.info("booking_denied", operation=operation, reason=decision.reason.value, **context)
    record_booking_attempt(operation, decision.reason.value)

    raise _ERROR_FOR_REASON[decision.reason]()


async def find_booking(db: AsyncSession, user_id: int) -> Booking:
    """Current booking of the user, room included."""
    booking = await booking_repository.find_by_user(db, user_id)
    if not booking:
        raise NotFoundError("Booking not found")
    return booking


async def create_booking(db: AsyncSession, user_id: int, room_id: int) -> Booking:
    """
    Book a room for an enrolled user holding a paid, in-person, hotel ticket.

    Raises:
        CannotBookError: no enrollment, or ticket missing/remote/reserved/without hotel
        NotFoundError: room does not exist (only once the user is eligible)
        RoomFullError: room occupancy already at capacity
    """
    with booking_latency.labels(operation="create").time():
        enrollment = await enrollment_repository.find_enrollment_by_user(db, user_id)
        ticket = None
        if enrollment:
            ticket = await enrollment_repository.find_ticket_by_enrollment(db, enrollment.id)

        room = await booking_repository.find_room(db, room_id, for_update=True)
        occupancy = room.occupancy if room else 0

        decision = validate_booking(
            enrollment_exists=enrollment is not None,
            ticket=ticket,
            room=room,
            occupancy=occupancy,
        )
        _raise_for_decision(decision, "create", user_id=user_id, room_id=room_id, occupancy=occupancy)

        booking = await booking_repository.insert(db, user_id, room_id)
        await db.commit()

    record_booking_attempt("create", "success")
    logger.info(
        "booking_created",
        booking_id=booking.id,
        user_id=user_id,
        room_id=room_id,
        occupancy=occupancy + 1,
        capacity=room.capacity,
    )
    return booking


async def update_booking(db: AsyncSession, booking_id: int, user_id: int, room_id: int) -> Booking:
    """
    Move the user's booking to another room.

    Only ownership and the target room are checked; enrollment and ticket
    were validated when the booking was created.

    Raises:
        CannotBookError: user has no booking, or booking_id is not theirs
        NotFoundError: target room does not exist
        RoomFullError: target room occupancy already at capacity
    """
    with booking_latency.labels(operation="update").time():
        current = await booking_repository.find_by_user(db, user_id)
        if not current or current.id != booking_id:
            logger.info(
                "booking_denied",
                operation="update",
                reason="not_owner",
                user_id=user_id,
                booking_id=booking_id,
            )
            record_booking_attempt("update", DenyReason.NOT_ELIGIBLE.value)
            raise CannotBookError("Booking does not belong to user")

        previous_room_id = current.room_id
        room = await booking_repository.find_room(db, room_id, for_update=True)
        occupancy = room.occupancy if room else 0

        decision = validate_room(room, occupancy)
        _raise_for_decision(
            decision,
            "update",
            user_id=user_id,
            booking_id=booking_id,
            room_id=room_id,
            occupancy=occupancy,
        )

        booking = await booking_repository.update_room(db, booking_id, room_id)
        await db.commit()

    record_booking_attempt("update", "success")
    logger.info(
        "booking_updated",
        booking_id=booking.id,
        user_id=user_id,
        from_room_id=previous_room_id,
        room_id=room_id,
    )
    return booking
