from datetime import datetime
import uuid

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


ACTIVE_BOOKING_PREDICATE = text("status = 'Confirmed'")


class BookingModel(Base):
    __tablename__ = 'booking'
    __table_args__ = (
        # One Confirmed booking per (user, event); cancelled rows are history
        Index(
            'uq_booking_active_user_event',
            'user_id',
            'event_id',
            unique=True,
            postgresql_where=ACTIVE_BOOKING_PREDICATE,
            sqlite_where=ACTIVE_BOOKING_PREDICATE,
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    event_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    user_name: Mapped[str] = mapped_column(String(100), nullable=False)
    user_email: Mapped[str] = mapped_column(String(255), nullable=False)
    tickets: Mapped[int] = mapped_column(Integer, nullable=False)
    total_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='Confirmed')
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class BookingSeatModel(Base):
    """Seats held by a booking; rows stay after cancellation"""

    __tablename__ = 'booking_seat'

    booking_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey('booking.id', ondelete='CASCADE'), primary_key=True
    )
    seat_id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
