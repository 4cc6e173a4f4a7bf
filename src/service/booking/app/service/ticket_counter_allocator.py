"""
Ticket Counter Allocator

Moves an event's available_seats counter. The read is an early exit only;
the conditional update in the repository is what keeps the counter >= 0.
"""

from datetime import datetime
from typing import Optional

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import InsufficientCapacityError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.entity.event_entity import Event
from src.service.booking.domain.validators import DateValidators


class TicketCounterAllocator:
    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    async def load_event(self, event_id: int) -> Event:
        event = await self.uow.event_query_repo.get_by_id(event_id=event_id)
        if not event:
            raise NotFoundError('Event not found')
        return event

    @Logger.io
    async def check_capacity(
        self, *, event_id: int, count: int, now: Optional[datetime] = None
    ) -> Event:
        event = await self.load_event(event_id)
        DateValidators.ensure_event_not_expired(event, now)
        if event.available_seats < count:
            raise InsufficientCapacityError(
                requested=count, available_seats=event.available_seats
            )
        return event

    @Logger.io
    async def reserve_tickets(
        self, *, event_id: int, count: int, now: Optional[datetime] = None
    ) -> int:
        await self.check_capacity(event_id=event_id, count=count, now=now)

        new_available = await self.uow.event_command_repo.reserve_tickets(
            event_id=event_id, count=count
        )
        if new_available is None:
            # Lost a race between the read above and the conditional update
            current = await self.load_event(event_id)
            raise InsufficientCapacityError(
                requested=count, available_seats=current.available_seats
            )
        return new_available

    @Logger.io
    async def release_tickets(self, *, event_id: int, count: int) -> int:
        new_available = await self.uow.event_command_repo.release_tickets(
            event_id=event_id, count=count
        )
        if new_available is None:
            raise NotFoundError('Event not found')
        return new_available
