"""
Seat Allocator

available -> booked happens in one conditional update; if it touches fewer
rows than requested the caller's unit of work is aborted with SeatConflict.
"""

from datetime import datetime
from typing import List, Optional

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError, SeatConflictError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_dto import SeatReservation
from src.service.booking.domain.entity.seat_entity import SeatStatus
from src.service.booking.domain.validators import DateValidators


class SeatAllocator:
    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @Logger.io
    async def check_seats(
        self, *, event_id: int, seat_ids: List[int], now: Optional[datetime] = None
    ) -> None:
        event = await self.uow.event_query_repo.get_by_id(event_id=event_id)
        if not event:
            raise NotFoundError('Event not found')
        DateValidators.ensure_event_not_expired(event, now)

        seats = await self.uow.seat_query_repo.get_by_ids(seat_ids=seat_ids)
        bookable = {
            seat.id
            for seat in seats
            if seat.event_id == event_id and seat.status == SeatStatus.AVAILABLE
        }
        if offending := [seat_id for seat_id in seat_ids if seat_id not in bookable]:
            raise SeatConflictError(offending)

    @Logger.io
    async def reserve_seats(
        self, *, event_id: int, seat_ids: List[int], now: Optional[datetime] = None
    ) -> SeatReservation:
        await self.check_seats(event_id=event_id, seat_ids=seat_ids, now=now)

        reserved = await self.uow.seat_command_repo.reserve(event_id=event_id, seat_ids=seat_ids)
        if len(reserved) != len(seat_ids):
            taken = {seat.id for seat in reserved}
            raise SeatConflictError([seat_id for seat_id in seat_ids if seat_id not in taken])

        return SeatReservation(
            seats=sorted(reserved, key=lambda seat: seat.sort_key),
            total_amount=sum(seat.price for seat in reserved),
        )

    @Logger.io
    async def release_seats(self, *, seat_ids: List[int]) -> int:
        return await self.uow.seat_command_repo.release(seat_ids=seat_ids)
