from collections import defaultdict
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.booking.driven_adapter.model.booking_model import BookingModel, BookingSeatModel
from src.service.booking.driven_adapter.repo.entity_mapper import to_booking


_booking_table = BookingModel.__table__
_booking_seat_table = BookingSeatModel.__table__


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    async def _seat_ids_by_booking(self, booking_ids: List[UUID]) -> Dict[UUID, List[int]]:
        seat_ids: Dict[UUID, List[int]] = defaultdict(list)
        if not booking_ids:
            return seat_ids
        result = await self.session.execute(
            select(_booking_seat_table.c.booking_id, _booking_seat_table.c.seat_id).where(
                _booking_seat_table.c.booking_id.in_(booking_ids)
            )
        )
        for booking_id, seat_id in result.all():
            seat_ids[booking_id].append(seat_id)
        return seat_ids

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        result = await self.session.execute(
            select(_booking_table).where(_booking_table.c.id == booking_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        seat_ids = await self._seat_ids_by_booking([row.id])
        return to_booking(row, seat_ids[row.id])

    @Logger.io
    async def get_active(self, *, user_id: int, event_id: int) -> Optional[Booking]:
        result = await self.session.execute(
            select(_booking_table).where(
                _booking_table.c.user_id == user_id,
                _booking_table.c.event_id == event_id,
                _booking_table.c.status == BookingStatus.CONFIRMED.value,
            )
        )
        row = result.one_or_none()
        if row is None:
            return None
        seat_ids = await self._seat_ids_by_booking([row.id])
        return to_booking(row, seat_ids[row.id])

    @Logger.io(truncate_content=True)
    async def list_by_user(self, *, user_id: int) -> List[Booking]:
        result = await self.session.execute(
            select(_booking_table)
            .where(_booking_table.c.user_id == user_id)
            .order_by(_booking_table.c.created_at.desc(), _booking_table.c.id.desc())
        )
        rows = result.all()
        seat_ids = await self._seat_ids_by_booking([row.id for row in rows])
        return [to_booking(row, seat_ids[row.id]) for row in rows]

    @Logger.io
    async def count_active_by_event(self, *, event_id: int) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(_booking_table)
            .where(
                _booking_table.c.event_id == event_id,
                _booking_table.c.status == BookingStatus.CONFIRMED.value,
            )
        )
        return result.scalar_one()
