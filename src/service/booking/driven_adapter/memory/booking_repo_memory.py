import copy
from typing import List, Optional
from uuid import UUID

from src.platform.exception.exceptions import DuplicateBookingError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.booking.driven_adapter.memory.in_memory_state import InMemoryState


class BookingCommandRepoMemory(IBookingCommandRepo):
    def __init__(self, *, state: InMemoryState):
        self.state = state

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        bookings = self.state.data.bookings
        # Same guarantee as the partial unique index on the SQL side
        for existing in bookings.values():
            if (
                existing.user_id == booking.user_id
                and existing.event_id == booking.event_id
                and existing.status == BookingStatus.CONFIRMED
            ):
                raise DuplicateBookingError()
        bookings[booking.id] = copy.deepcopy(booking)
        return copy.deepcopy(booking)

    @Logger.io
    async def cancel(self, *, booking_id: UUID, user_id: int) -> Optional[Booking]:
        stored = self.state.data.bookings.get(booking_id)
        if stored is None or stored.user_id != user_id or stored.status != BookingStatus.CONFIRMED:
            return None
        cancelled = stored.cancel()
        self.state.data.bookings[booking_id] = cancelled
        return copy.deepcopy(cancelled)


class BookingQueryRepoMemory(IBookingQueryRepo):
    def __init__(self, *, state: InMemoryState):
        self.state = state

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        stored = self.state.data.bookings.get(booking_id)
        return copy.deepcopy(stored) if stored else None

    @Logger.io
    async def get_active(self, *, user_id: int, event_id: int) -> Optional[Booking]:
        for booking in self.state.data.bookings.values():
            if (
                booking.user_id == user_id
                and booking.event_id == event_id
                and booking.status == BookingStatus.CONFIRMED
            ):
                return copy.deepcopy(booking)
        return None

    @Logger.io
    async def list_by_user(self, *, user_id: int) -> List[Booking]:
        bookings = [b for b in self.state.data.bookings.values() if b.user_id == user_id]
        bookings.sort(key=lambda b: (b.created_at, b.id), reverse=True)
        return [copy.deepcopy(b) for b in bookings]

    @Logger.io
    async def count_active_by_event(self, *, event_id: int) -> int:
        return sum(
            1
            for b in self.state.data.bookings.values()
            if b.event_id == event_id and b.status == BookingStatus.CONFIRMED
        )
