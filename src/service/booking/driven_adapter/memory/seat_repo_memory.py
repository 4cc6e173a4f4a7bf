import copy
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_seat_command_repo import ISeatCommandRepo
from src.service.booking.app.interface.i_seat_query_repo import ISeatQueryRepo
from src.service.booking.domain.entity.seat_entity import Seat, SeatStatus
from src.service.booking.driven_adapter.memory.in_memory_state import InMemoryState


class SeatCommandRepoMemory(ISeatCommandRepo):
    def __init__(self, *, state: InMemoryState):
        self.state = state

    @Logger.io(truncate_content=True)
    async def create_batch(self, *, seats: List[Seat]) -> List[Seat]:
        data = self.state.data
        taken = {(s.event_id, s.row, s.seat_number) for s in data.seats.values()}
        created: List[Seat] = []
        for seat in seats:
            key = (seat.event_id, seat.row, seat.seat_number)
            if key in taken:
                raise ValidationError(f'Seat {seat.label} already exists for this event')
            taken.add(key)
            stored = attrs.evolve(seat, id=data.next_seat_id)
            data.seats[stored.id] = stored  # type: ignore[index]
            data.next_seat_id += 1
            created.append(copy.deepcopy(stored))
        return created

    @Logger.io
    async def reserve(self, *, event_id: int, seat_ids: List[int]) -> List[Seat]:
        reserved: List[Seat] = []
        for seat_id in seat_ids:
            stored = self.state.data.seats.get(seat_id)
            if (
                stored is not None
                and stored.event_id == event_id
                and stored.status == SeatStatus.AVAILABLE
            ):
                stored.status = SeatStatus.BOOKED
                reserved.append(copy.deepcopy(stored))
        return reserved

    @Logger.io
    async def release(self, *, seat_ids: List[int]) -> int:
        released = 0
        for seat_id in seat_ids:
            stored = self.state.data.seats.get(seat_id)
            if stored is not None and stored.status == SeatStatus.BOOKED:
                stored.status = SeatStatus.AVAILABLE
                released += 1
        return released

    @Logger.io
    async def delete_by_event(self, *, event_id: int) -> int:
        seats = self.state.data.seats
        doomed = [seat_id for seat_id, seat in seats.items() if seat.event_id == event_id]
        for seat_id in doomed:
            del seats[seat_id]
        return len(doomed)


class SeatQueryRepoMemory(ISeatQueryRepo):
    def __init__(self, *, state: InMemoryState):
        self.state = state

    @Logger.io
    async def get_by_ids(self, *, seat_ids: List[int]) -> List[Seat]:
        seats = self.state.data.seats
        return [copy.deepcopy(seats[seat_id]) for seat_id in seat_ids if seat_id in seats]

    @Logger.io(truncate_content=True)
    async def list_by_event(
        self, *, event_id: int, section: Optional[str] = None, row: Optional[str] = None
    ) -> List[Seat]:
        seats = [
            s
            for s in self.state.data.seats.values()
            if s.event_id == event_id
            and (section is None or s.section == section)
            and (row is None or s.row == row)
        ]
        seats.sort(key=lambda s: (len(s.row), s.row, s.seat_number))
        return [copy.deepcopy(s) for s in seats]

    @Logger.io
    async def count_by_event(self, *, event_id: int) -> int:
        return sum(1 for s in self.state.data.seats.values() if s.event_id == event_id)
