"""
Eligibility lookup: read-only access to a user's enrollment and ticket.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel_booking.core.metrics import record_db_operation
from hotel_booking.models.enrollment import Enrollment
from hotel_booking.models.ticket import Ticket


async def find_enrollment_by_user(db: AsyncSession, user_id: int) -> Optional[Enrollment]:
    record_db_operation("read")
    result = await db.execute(
        select(Enrollment)
        .where(Enrollment.user_id == user_id)
        .options(selectinload(Enrollment.addresses))
    )
    return result.scalar_one_or_none()


async def find_ticket_by_enrollment(db: AsyncSession, enrollment_id: int) -> Optional[Ticket]:
    """A user holds at most one ticket per enrollment; take the first if data says otherwise."""
    record_db_operation("read")
    result = await db.execute(
        select(Ticket)
        .where(Ticket.enrollment_id == enrollment_id)
        .options(selectinload(Ticket.ticket_type))
        .order_by(Ticket.id.asc())
        .limit(1)
    )
    return result.scalar_one_or_none()
