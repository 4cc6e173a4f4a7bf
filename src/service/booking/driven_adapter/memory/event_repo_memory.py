import copy
from datetime import datetime, timezone
from typing import List, Optional

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.booking.domain.entity.event_entity import Event
from src.service.booking.driven_adapter.memory.in_memory_state import InMemoryState


class EventCommandRepoMemory(IEventCommandRepo):
    def __init__(self, *, state: InMemoryState):
        self.state = state

    @Logger.io
    async def create(self, *, event: Event) -> Event:
        data = self.state.data
        stored = attrs.evolve(copy.deepcopy(event), id=data.next_event_id)
        data.events[stored.id] = stored  # type: ignore[index]
        data.next_event_id += 1
        return copy.deepcopy(stored)

    @Logger.io
    async def update_details(self, *, event: Event) -> Event:
        stored = self.state.data.events[event.id]  # type: ignore[index]
        stored.name = event.name
        stored.date = event.date
        stored.location = event.location
        stored.description = event.description
        stored.price = event.price
        stored.updated_at = datetime.now(timezone.utc)
        return copy.deepcopy(stored)

    @Logger.io
    async def delete(self, *, event_id: int) -> bool:
        stored = self.state.data.events.get(event_id)
        if stored is None or stored.available_seats != stored.total_seats:
            return False
        del self.state.data.events[event_id]
        return True

    @Logger.io
    async def reserve_tickets(self, *, event_id: int, count: int) -> Optional[int]:
        stored = self.state.data.events.get(event_id)
        if stored is None or stored.available_seats < count:
            return None
        stored.available_seats -= count
        stored.updated_at = datetime.now(timezone.utc)
        return stored.available_seats

    @Logger.io
    async def release_tickets(self, *, event_id: int, count: int) -> Optional[int]:
        stored = self.state.data.events.get(event_id)
        if stored is None:
            return None
        stored.available_seats = min(stored.available_seats + count, stored.total_seats)
        stored.updated_at = datetime.now(timezone.utc)
        return stored.available_seats

    @Logger.io
    async def resize(self, *, event_id: int, delta: int) -> Optional[Event]:
        stored = self.state.data.events.get(event_id)
        if (
            stored is None
            or stored.available_seats + delta < 0
            or stored.total_seats + delta < 1
        ):
            return None
        stored.total_seats += delta
        stored.available_seats += delta
        stored.updated_at = datetime.now(timezone.utc)
        return copy.deepcopy(stored)

    @Logger.io
    async def enable_seat_selection(self, *, event_id: int) -> Optional[Event]:
        stored = self.state.data.events.get(event_id)
        if stored is None:
            return None
        stored.has_seat_selection = True
        stored.updated_at = datetime.now(timezone.utc)
        return copy.deepcopy(stored)


class EventQueryRepoMemory(IEventQueryRepo):
    def __init__(self, *, state: InMemoryState):
        self.state = state

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> Optional[Event]:
        stored = self.state.data.events.get(event_id)
        return copy.deepcopy(stored) if stored else None

    @Logger.io
    async def list_upcoming(self, *, now: datetime) -> List[Event]:
        events = [e for e in self.state.data.events.values() if e.date >= now]
        return [copy.deepcopy(e) for e in sorted(events, key=lambda e: (e.date, e.id))]
