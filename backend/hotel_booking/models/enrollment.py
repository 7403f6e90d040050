"""
Enrollment: proof that a user registered for the event.

A user has at most one enrollment (unique user_id). Addresses are kept in
their own table; `has_address` reports whether one was registered.
"""

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from hotel_booking.db.base import Base, TimestampMixin


class Enrollment(Base, TimestampMixin):
    __tablename__ = "enrollments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)

    # Relationships
    user = relationship("User", back_populates="enrollment")
    addresses = relationship("Address", back_populates="enrollment", lazy="selectin")
    tickets = relationship("Ticket", back_populates="enrollment")

    @property
    def has_address(self) -> bool:
        return bool(self.addresses)

    def __repr__(self) -> str:
        return f"<Enrollment(id={self.id}, user={self.user_id})>"


class Address(Base, TimestampMixin):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, index=True)
    enrollment_id = Column(Integer, ForeignKey("enrollments.id"), nullable=False, index=True)
    street = Column(String(255), nullable=False)
    city = Column(String(255), nullable=False)
    state = Column(String(2), nullable=False)

    enrollment = relationship("Enrollment", back_populates="addresses")
