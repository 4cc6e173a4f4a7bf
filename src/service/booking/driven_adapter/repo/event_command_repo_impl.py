"""
Event Command Repository Implementation

Capacity changes are single conditional UPDATE ... RETURNING statements, so
concurrent units of work can never drive available_seats below zero.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import case, delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.booking.domain.entity.event_entity import Event
from src.service.booking.driven_adapter.model.event_model import EventModel
from src.service.booking.driven_adapter.repo.entity_mapper import to_event


_event_table = EventModel.__table__


class EventCommandRepoImpl(IEventCommandRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io
    async def create(self, *, event: Event) -> Event:
        now = datetime.now(timezone.utc)
        db_event = EventModel(
            name=event.name,
            date=event.date,
            location=event.location,
            description=event.description,
            total_seats=event.total_seats,
            available_seats=event.available_seats,
            price=event.price,
            seat_layout=event.seat_layout.to_dict() if event.seat_layout else None,
            has_seat_selection=event.has_seat_selection,
            created_at=event.created_at or now,
            updated_at=event.updated_at or now,
        )
        self.session.add(db_event)
        await self.session.flush()
        return to_event(db_event)

    @Logger.io
    async def update_details(self, *, event: Event) -> Event:
        result = await self.session.execute(
            update(_event_table)
            .where(_event_table.c.id == event.id)
            .values(
                name=event.name,
                date=event.date,
                location=event.location,
                description=event.description,
                price=event.price,
                updated_at=datetime.now(timezone.utc),
            )
            .returning(*_event_table.c)
        )
        return to_event(result.one())

    @Logger.io
    async def delete(self, *, event_id: int) -> bool:
        result = await self.session.execute(
            delete(_event_table)
            .where(
                _event_table.c.id == event_id,
                _event_table.c.available_seats == _event_table.c.total_seats,
            )
            .returning(_event_table.c.id)
        )
        return result.scalar_one_or_none() is not None

    @Logger.io
    async def reserve_tickets(self, *, event_id: int, count: int) -> Optional[int]:
        result = await self.session.execute(
            update(_event_table)
            .where(
                _event_table.c.id == event_id,
                _event_table.c.available_seats >= count,
            )
            .values(
                available_seats=_event_table.c.available_seats - count,
                updated_at=datetime.now(timezone.utc),
            )
            .returning(_event_table.c.available_seats)
        )
        return result.scalar_one_or_none()

    @Logger.io
    async def release_tickets(self, *, event_id: int, count: int) -> Optional[int]:
        raised = _event_table.c.available_seats + count
        result = await self.session.execute(
            update(_event_table)
            .where(_event_table.c.id == event_id)
            .values(
                available_seats=case(
                    (raised > _event_table.c.total_seats, _event_table.c.total_seats),
                    else_=raised,
                ),
                updated_at=datetime.now(timezone.utc),
            )
            .returning(_event_table.c.available_seats)
        )
        return result.scalar_one_or_none()

    @Logger.io
    async def resize(self, *, event_id: int, delta: int) -> Optional[Event]:
        result = await self.session.execute(
            update(_event_table)
            .where(
                _event_table.c.id == event_id,
                _event_table.c.available_seats + delta >= 0,
                _event_table.c.total_seats + delta >= 1,
            )
            .values(
                total_seats=_event_table.c.total_seats + delta,
                available_seats=_event_table.c.available_seats + delta,
                updated_at=datetime.now(timezone.utc),
            )
            .returning(*_event_table.c)
        )
        row = result.one_or_none()
        return to_event(row) if row is not None else None

    @Logger.io
    async def enable_seat_selection(self, *, event_id: int) -> Optional[Event]:
        result = await self.session.execute(
            update(_event_table)
            .where(_event_table.c.id == event_id)
            .values(has_seat_selection=True, updated_at=datetime.now(timezone.utc))
            .returning(*_event_table.c)
        )
        row = result.one_or_none()
        return to_event(row) if row is not None else None
