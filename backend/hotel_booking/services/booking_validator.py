"""
Booking validation: pure decision logic, no I/O.

Checks run in a fixed order and the first failure wins:

  1. user has an enrollment
  2. user has a ticket
  3. ticket type is not remote
  4. ticket is not RESERVED (i.e. it has been paid)
  5. ticket type includes hotel
  6. room exists
  7. room occupancy is below capacity

Eligibility (1-5) is always decided before anything about the room, so an
ineligible user gets the same answer whatever room they ask for. Room
existence is checked before capacity.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from hotel_booking.models.hotel import Room
from hotel_booking.models.ticket import Ticket, TicketStatus


class DenyReason(str, Enum):
    NOT_ELIGIBLE = "not_eligible"
    ROOM_NOT_FOUND = "room_not_found"
    ROOM_FULL = "room_full"


@dataclass(frozen=True)
class BookingDecision:
    allowed: bool
    reason: Optional[DenyReason] = None

    @classmethod
    def allow(cls) -> "BookingDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "BookingDecision":
        return cls(allowed=False, reason=reason)


def _ticket_grants_hotel(ticket: Optional[Ticket]) -> bool:
    if ticket is None:
        return False
    if ticket.ticket_type.is_remote:
        return False
    if ticket.status == TicketStatus.RESERVED.value:
        return False
    return bool(ticket.ticket_type.includes_hotel)


def validate_room(room: Optional[Room], occupancy: int) -> BookingDecision:
    """Room checks only (existence, then capacity)."""
    if room is None:
        return BookingDecision.deny(DenyReason.ROOM_NOT_FOUND)
    if occupancy >= room.capacity:
        return BookingDecision.deny(DenyReason.ROOM_FULL)
    return BookingDecision.allow()


def validate_booking(
    enrollment_exists: bool,
    ticket: Optional[Ticket],
    room: Optional[Room],
    occupancy: int,
) -> BookingDecision:
    """Full eligibility + room decision for a new booking."""
    if not enrollment_exists or not _ticket_grants_hotel(ticket):
        return BookingDecision.deny(DenyReason.NOT_ELIGIBLE)
    return validate_room(room, occupancy)
