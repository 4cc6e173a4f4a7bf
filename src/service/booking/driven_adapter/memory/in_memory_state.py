"""
In-process inventory store

Single-process backend for local runs and tests. Every access goes through
InMemoryUnitOfWork, which holds `lock` for the duration of the unit.
"""

import asyncio
from typing import Dict
from uuid import UUID

import attrs

from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.event_entity import Event
from src.service.booking.domain.entity.seat_entity import Seat


@attrs.define
class InMemoryData:
    events: Dict[int, Event] = attrs.field(factory=dict)
    seats: Dict[int, Seat] = attrs.field(factory=dict)
    bookings: Dict[UUID, Booking] = attrs.field(factory=dict)
    next_event_id: int = 1
    next_seat_id: int = 1


class InMemoryState:
    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.data = InMemoryData()
