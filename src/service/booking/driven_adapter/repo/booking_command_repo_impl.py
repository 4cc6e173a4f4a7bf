"""
Booking Command Repository Implementation

Duplicate protection is the partial unique index
`uq_booking_active_user_event (user_id, event_id) WHERE status = 'Confirmed'`;
an IntegrityError on insert means another Confirmed booking won.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import DuplicateBookingError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.booking.driven_adapter.model.booking_model import BookingModel, BookingSeatModel
from src.service.booking.driven_adapter.repo.entity_mapper import to_booking


_booking_table = BookingModel.__table__
_booking_seat_table = BookingSeatModel.__table__


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        now = datetime.now(timezone.utc)
        try:
            await self.session.execute(
                insert(_booking_table).values(
                    id=booking.id,
                    user_id=booking.user_id,
                    event_id=booking.event_id,
                    user_name=booking.user_name,
                    user_email=booking.user_email,
                    tickets=booking.tickets,
                    total_amount=booking.total_amount,
                    status=booking.status.value,
                    created_at=booking.created_at or now,
                    updated_at=booking.updated_at or now,
                )
            )
        except IntegrityError as e:
            raise DuplicateBookingError() from e

        if booking.seat_ids:
            await self.session.execute(
                insert(_booking_seat_table),
                [{'booking_id': booking.id, 'seat_id': seat_id} for seat_id in booking.seat_ids],
            )
        return booking

    @Logger.io
    async def cancel(self, *, booking_id: UUID, user_id: int) -> Optional[Booking]:
        result = await self.session.execute(
            update(_booking_table)
            .where(
                _booking_table.c.id == booking_id,
                _booking_table.c.user_id == user_id,
                _booking_table.c.status == BookingStatus.CONFIRMED.value,
            )
            .values(
                status=BookingStatus.CANCELLED.value,
                updated_at=datetime.now(timezone.utc),
            )
            .returning(*_booking_table.c)
        )
        row = result.one_or_none()
        if row is None:
            return None

        seat_rows = await self.session.execute(
            select(_booking_seat_table.c.seat_id).where(
                _booking_seat_table.c.booking_id == booking_id
            )
        )
        return to_booking(row, list(seat_rows.scalars().all()))
