"""
Booking Ledger

Who booked what. The duplicate pre-check is an early exit only; the storage
uniqueness guarantee on (user_id, event_id) for Confirmed bookings decides.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    AlreadyCancelledError,
    DuplicateBookingError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.booking.domain.entity.event_entity import Event
from src.service.booking.domain.entity.user_entity import CurrentUser
from src.service.booking.domain.validators import DateValidators


class BookingLedger:
    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @Logger.io
    async def ensure_no_active_booking(self, *, user_id: int, event_id: int) -> None:
        if await self.uow.booking_query_repo.get_active(user_id=user_id, event_id=event_id):
            raise DuplicateBookingError()

    @Logger.io
    async def get_owned_booking(self, *, booking_id: UUID, user_id: int) -> Booking:
        booking = await self.uow.booking_query_repo.get_by_id(booking_id=booking_id)
        # Someone else's booking is indistinguishable from a missing one
        if not booking or booking.user_id != user_id:
            raise NotFoundError('Booking not found')
        return booking

    @Logger.io
    async def create_booking(
        self,
        *,
        user: CurrentUser,
        event_id: int,
        tickets: int,
        seat_ids: Optional[List[int]] = None,
        total_amount: int = 0,
    ) -> Booking:
        await self.ensure_no_active_booking(user_id=user.id, event_id=event_id)
        booking = Booking.create(
            user_id=user.id,
            event_id=event_id,
            user_name=user.name,
            user_email=user.email,
            tickets=tickets,
            seat_ids=seat_ids,
            total_amount=total_amount,
        )
        return await self.uow.booking_command_repo.create(booking=booking)

    @Logger.io
    async def get_cancellable_booking(self, *, booking_id: UUID, user_id: int) -> Booking:
        booking = await self.get_owned_booking(booking_id=booking_id, user_id=user_id)
        if booking.status == BookingStatus.CANCELLED:
            raise AlreadyCancelledError()
        return booking

    @Logger.io
    async def ensure_event_not_over(
        self, *, booking: Booking, now: Optional[datetime] = None
    ) -> Event:
        event = await self.uow.event_query_repo.get_by_id(event_id=booking.event_id)
        if not event:
            raise NotFoundError('Event not found')
        DateValidators.ensure_event_not_expired(event, now)
        return event

    @Logger.io
    async def mark_cancelled(self, *, booking_id: UUID, user_id: int) -> Booking:
        """Conditional Confirmed -> Cancelled flip; the checks above must have passed"""
        cancelled = await self.uow.booking_command_repo.cancel(
            booking_id=booking_id, user_id=user_id
        )
        if cancelled is None:
            # A concurrent cancel flipped it first
            raise AlreadyCancelledError()
        return cancelled

    @Logger.io
    async def cancel_booking(
        self, *, booking_id: UUID, user_id: int, now: Optional[datetime] = None
    ) -> Booking:
        """Returns the cancelled booking, whose tickets/seat_ids are what must be released"""
        booking = await self.get_cancellable_booking(booking_id=booking_id, user_id=user_id)
        await self.ensure_event_not_over(booking=booking, now=now)
        return await self.mark_cancelled(booking_id=booking_id, user_id=user_id)
