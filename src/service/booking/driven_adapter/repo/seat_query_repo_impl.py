from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_seat_query_repo import ISeatQueryRepo
from src.service.booking.domain.entity.seat_entity import Seat
from src.service.booking.driven_adapter.model.seat_model import SeatModel
from src.service.booking.driven_adapter.repo.entity_mapper import to_seat


_seat_table = SeatModel.__table__


class SeatQueryRepoImpl(ISeatQueryRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io
    async def get_by_ids(self, *, seat_ids: List[int]) -> List[Seat]:
        if not seat_ids:
            return []
        result = await self.session.execute(
            select(_seat_table).where(_seat_table.c.id.in_(seat_ids)).order_by(_seat_table.c.id)
        )
        return [to_seat(row) for row in result.all()]

    @Logger.io(truncate_content=True)
    async def list_by_event(
        self, *, event_id: int, section: Optional[str] = None, row: Optional[str] = None
    ) -> List[Seat]:
        query = select(_seat_table).where(_seat_table.c.event_id == event_id)
        if section is not None:
            query = query.where(_seat_table.c.section == section)
        if row is not None:
            query = query.where(_seat_table.c.row == row)
        # A..Z before AA..
        query = query.order_by(
            func.length(_seat_table.c.row), _seat_table.c.row, _seat_table.c.seat_number
        )
        result = await self.session.execute(query)
        return [to_seat(r) for r in result.all()]

    @Logger.io
    async def count_by_event(self, *, event_id: int) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(_seat_table).where(_seat_table.c.event_id == event_id)
        )
        return result.scalar_one()
