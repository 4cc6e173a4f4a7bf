"""
Seat Command Repository Implementation

`reserve` is the seat allocator's atomic step: status check and transition
happen in one UPDATE, so two units of work can never both book a seat.
"""

from typing import List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_seat_command_repo import ISeatCommandRepo
from src.service.booking.domain.entity.seat_entity import Seat, SeatStatus
from src.service.booking.driven_adapter.model.seat_model import SeatModel
from src.service.booking.driven_adapter.repo.entity_mapper import to_seat


_seat_table = SeatModel.__table__


class SeatCommandRepoImpl(ISeatCommandRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io(truncate_content=True)
    async def create_batch(self, *, seats: List[Seat]) -> List[Seat]:
        if not seats:
            return []

        existing = await self.session.execute(
            select(_seat_table.c.event_id, _seat_table.c.row, _seat_table.c.seat_number).where(
                _seat_table.c.event_id.in_(sorted({s.event_id for s in seats}))
            )
        )
        taken = {tuple(row) for row in existing.all()}
        for seat in seats:
            position = (seat.event_id, seat.row, seat.seat_number)
            if position in taken:
                raise ValidationError(f'Seat {seat.label} already exists for this event')
            taken.add(position)

        result = await self.session.execute(
            insert(_seat_table).returning(*_seat_table.c, sort_by_parameter_order=True),
            [
                {
                    'event_id': s.event_id,
                    'seat_number': s.seat_number,
                    'row': s.row,
                    'section': s.section,
                    'price': s.price,
                    'seat_type': s.seat_type.value,
                    'status': s.status.value,
                }
                for s in seats
            ],
        )
        return [to_seat(row) for row in result.all()]

    @Logger.io
    async def reserve(self, *, event_id: int, seat_ids: List[int]) -> List[Seat]:
        result = await self.session.execute(
            update(_seat_table)
            .where(
                _seat_table.c.id.in_(seat_ids),
                _seat_table.c.event_id == event_id,
                _seat_table.c.status == SeatStatus.AVAILABLE.value,
            )
            .values(status=SeatStatus.BOOKED.value)
            .returning(*_seat_table.c)
        )
        return [to_seat(row) for row in result.all()]

    @Logger.io
    async def release(self, *, seat_ids: List[int]) -> int:
        if not seat_ids:
            return 0
        result = await self.session.execute(
            update(_seat_table)
            .where(
                _seat_table.c.id.in_(seat_ids),
                _seat_table.c.status == SeatStatus.BOOKED.value,
            )
            .values(status=SeatStatus.AVAILABLE.value)
        )
        return result.rowcount  # type: ignore[attr-defined]

    @Logger.io
    async def delete_by_event(self, *, event_id: int) -> int:
        result = await self.session.execute(
            delete(_seat_table).where(_seat_table.c.event_id == event_id)
        )
        return result.rowcount  # type: ignore[attr-defined]
