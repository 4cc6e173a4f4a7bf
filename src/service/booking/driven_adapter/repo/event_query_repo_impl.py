from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.booking.domain.entity.event_entity import Event
from src.service.booking.driven_adapter.model.event_model import EventModel
from src.service.booking.driven_adapter.repo.entity_mapper import to_event


class EventQueryRepoImpl(IEventQueryRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> Optional[Event]:
        # Counters may have been changed by Core UPDATEs earlier in this session
        result = await self.session.execute(
            select(EventModel)
            .where(EventModel.id == event_id)
            .execution_options(populate_existing=True)
        )
        db_event = result.scalar_one_or_none()
        return to_event(db_event) if db_event else None

    @Logger.io(truncate_content=True)
    async def list_upcoming(self, *, now: datetime) -> List[Event]:
        result = await self.session.execute(
            select(EventModel)
            .where(EventModel.date >= now)
            .order_by(EventModel.date, EventModel.id)
            .execution_options(populate_existing=True)
        )
        return [to_event(db_event) for db_event in result.scalars().all()]
