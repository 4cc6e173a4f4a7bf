"""
Reservation Coordinator

Runs a booking or a cancellation as one unit of work across the inventory
(ticket counter + seats) and the booking ledger.

Booking stages:      Validating -> CapacityChecking -> DuplicateChecking -> Committing -> Done
Cancellation stages: Validating -> EventDateChecking -> Committing -> Done

Every check runs before the first mutation. Mutations use conditional updates
and are committed together; any failure rolls the whole unit back. The
notification is sent after commit and can never undo the booking.
"""

from contextlib import contextmanager
from enum import StrEnum
import time
from typing import Callable, Iterator, List, Self
from uuid import UUID

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import BookingMetrics
from src.service.booking.app.dto.booking_dto import BookingDetail, CancellationResult
from src.service.booking.app.interface.i_booking_notifier import IBookingNotifier
from src.service.booking.app.service.booking_ledger import BookingLedger
from src.service.booking.app.service.seat_allocator import SeatAllocator
from src.service.booking.app.service.ticket_counter_allocator import TicketCounterAllocator
from src.service.booking.domain.domain_event.booking_notification import (
    BookingNotification,
    NotificationKind,
)
from src.service.booking.domain.entity.seat_entity import Seat
from src.service.booking.domain.entity.user_entity import CurrentUser
from src.service.booking.domain.validators import BusinessRuleValidators, DateValidators


tracer = trace.get_tracer(__name__)


class ReservationStage(StrEnum):
    VALIDATING = 'Validating'
    CAPACITY_CHECKING = 'CapacityChecking'
    DUPLICATE_CHECKING = 'DuplicateChecking'
    EVENT_DATE_CHECKING = 'EventDateChecking'
    COMMITTING = 'Committing'
    DONE = 'Done'


@attrs.define
class StageTracker:
    operation: str
    span: trace.Span
    stage: ReservationStage = ReservationStage.VALIDATING

    def advance(self, stage: ReservationStage) -> None:
        self.stage = stage
        self.span.add_event(stage.value)
        self.span.set_attribute('reservation.stage', stage.value)


class ReservationCoordinator:
    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        notifier: IBookingNotifier,
        booking_metrics: BookingMetrics,
    ) -> None:
        self.uow_factory = uow_factory
        self.notifier = notifier
        self.metrics = booking_metrics

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        notifier: IBookingNotifier = Depends(Provide[Container.booking_notifier]),
        booking_metrics: BookingMetrics = Depends(Provide[Container.booking_metrics]),
    ) -> Self:
        return cls(uow_factory=uow_factory, notifier=notifier, booking_metrics=booking_metrics)

    @contextmanager
    def _stages(self, operation: str, **attributes: int | str) -> Iterator[StageTracker]:
        started = time.perf_counter()
        with tracer.start_as_current_span(
            f'reservation.{operation}',
            attributes={f'reservation.{k}': v for k, v in attributes.items()},
        ) as span:
            tracker = StageTracker(operation=operation, span=span)
            span.set_attribute('reservation.stage', tracker.stage.value)
            try:
                yield tracker
            except CustomBaseError as e:
                span.set_attribute('reservation.failed_stage', tracker.stage.value)
                span.set_attribute('reservation.error_code', e.code)
                self.metrics.record_booking_request(
                    operation=operation, result=e.code, duration=time.perf_counter() - started
                )
                Logger.base.info(
                    f'🚫 [{operation.upper()}] Aborted at {tracker.stage}: {e.code}'
                )
                raise
            except Exception:
                span.set_attribute('reservation.failed_stage', tracker.stage.value)
                self.metrics.record_booking_request(
                    operation=operation, result='error', duration=time.perf_counter() - started
                )
                raise

            tracker.advance(ReservationStage.DONE)
            self.metrics.record_booking_request(
                operation=operation, result='success', duration=time.perf_counter() - started
            )

    async def _notify(self, notification: BookingNotification) -> None:
        try:
            await self.notifier.notify(notification)
        except Exception as e:
            # Delivery is best effort; the booking is already committed
            self.metrics.record_notification_failure(kind=notification.kind.value)
            Logger.base.warning(
                f'⚠️ [NOTIFY] Failed to deliver {notification.kind} for booking '
                f'{notification.booking_id}: {type(e).__name__}: {e}'
            )

    @Logger.io
    async def book_tickets(self, *, user: CurrentUser, event_id: int, tickets: int) -> BookingDetail:
        with self._stages('book_tickets', event_id=event_id, tickets=tickets) as tracker:
            BusinessRuleValidators.validate_ticket_count(tickets)

            async with self.uow_factory() as uow:
                counter = TicketCounterAllocator(uow)
                ledger = BookingLedger(uow)

                event = await counter.load_event(event_id)
                BusinessRuleValidators.validate_generic_booking_mode(event)
                DateValidators.ensure_event_not_expired(event)

                tracker.advance(ReservationStage.CAPACITY_CHECKING)
                await counter.check_capacity(event_id=event_id, count=tickets)

                tracker.advance(ReservationStage.DUPLICATE_CHECKING)
                await ledger.ensure_no_active_booking(user_id=user.id, event_id=event_id)

                tracker.advance(ReservationStage.COMMITTING)
                available = await counter.reserve_tickets(event_id=event_id, count=tickets)
                booking = await ledger.create_booking(
                    user=user, event_id=event_id, tickets=tickets
                )
                await uow.commit()

        self.metrics.record_tickets_moved(
            direction='reserved', count=tickets, event_id=event_id, available=available
        )
        Logger.base.info(
            f'🎫 [BOOK_TICKETS] Booking {booking.id}: {tickets} tickets for event {event_id}, '
            f'{available} left'
        )

        event = attrs.evolve(event, available_seats=available)
        await self._notify(
            BookingNotification.from_booking(
                kind=NotificationKind.BOOKING_CONFIRMED, booking=booking, event=event, seats=[]
            )
        )
        return BookingDetail(booking=booking, event=event, seats=[])

    @Logger.io
    async def book_seats(
        self, *, user: CurrentUser, event_id: int, seat_ids: List[int]
    ) -> BookingDetail:
        with self._stages('book_seats', event_id=event_id, seats=len(seat_ids)) as tracker:
            seat_ids = BusinessRuleValidators.validate_seat_ids(seat_ids)

            async with self.uow_factory() as uow:
                counter = TicketCounterAllocator(uow)
                seat_allocator = SeatAllocator(uow)
                ledger = BookingLedger(uow)

                event = await counter.load_event(event_id)
                BusinessRuleValidators.validate_seat_booking_mode(event)
                DateValidators.ensure_event_not_expired(event)

                tracker.advance(ReservationStage.CAPACITY_CHECKING)
                await seat_allocator.check_seats(event_id=event_id, seat_ids=seat_ids)
                await counter.check_capacity(event_id=event_id, count=len(seat_ids))

                tracker.advance(ReservationStage.DUPLICATE_CHECKING)
                await ledger.ensure_no_active_booking(user_id=user.id, event_id=event_id)

                tracker.advance(ReservationStage.COMMITTING)
                reservation = await seat_allocator.reserve_seats(
                    event_id=event_id, seat_ids=seat_ids
                )
                # Seat bookings hold tickets too, so the counter stays in step
                available = await counter.reserve_tickets(event_id=event_id, count=len(seat_ids))
                booking = await ledger.create_booking(
                    user=user,
                    event_id=event_id,
                    tickets=len(seat_ids),
                    seat_ids=reservation.seat_ids,
                    total_amount=reservation.total_amount,
                )
                await uow.commit()

        self.metrics.record_tickets_moved(
            direction='reserved', count=len(seat_ids), event_id=event_id, available=available
        )
        Logger.base.info(
            f'💺 [BOOK_SEATS] Booking {booking.id}: seats '
            f'{[seat.label for seat in reservation.seats]} for event {event_id}, '
            f'total {reservation.total_amount}'
        )

        event = attrs.evolve(event, available_seats=available)
        await self._notify(
            BookingNotification.from_booking(
                kind=NotificationKind.BOOKING_CONFIRMED,
                booking=booking,
                event=event,
                seats=reservation.seats,
            )
        )
        return BookingDetail(booking=booking, event=event, seats=reservation.seats)

    @Logger.io
    async def cancel_booking(self, *, user: CurrentUser, booking_id: UUID) -> CancellationResult:
        with self._stages('cancel_booking', booking_id=str(booking_id)) as tracker:
            async with self.uow_factory() as uow:
                counter = TicketCounterAllocator(uow)
                seat_allocator = SeatAllocator(uow)
                ledger = BookingLedger(uow)

                booking = await ledger.get_cancellable_booking(
                    booking_id=booking_id, user_id=user.id
                )

                tracker.advance(ReservationStage.EVENT_DATE_CHECKING)
                event = await ledger.ensure_event_not_over(booking=booking)

                tracker.advance(ReservationStage.COMMITTING)
                # The conditional flip goes first so a concurrent cancel releases nothing
                cancelled = await ledger.mark_cancelled(booking_id=booking_id, user_id=user.id)
                available = await counter.release_tickets(
                    event_id=cancelled.event_id, count=cancelled.tickets
                )
                seats: List[Seat] = []
                if cancelled.is_seat_booking:
                    await seat_allocator.release_seats(seat_ids=cancelled.seat_ids)
                    seats = await uow.seat_query_repo.get_by_ids(seat_ids=cancelled.seat_ids)
                await uow.commit()

        self.metrics.record_tickets_moved(
            direction='released',
            count=cancelled.tickets,
            event_id=cancelled.event_id,
            available=available,
        )
        Logger.base.info(
            f'↩️  [CANCEL] Booking {booking_id}: released {cancelled.tickets} tickets '
            f'and {len(cancelled.seat_ids)} seats, {available} available'
        )

        event = attrs.evolve(event, available_seats=available)
        await self._notify(
            BookingNotification.from_booking(
                kind=NotificationKind.BOOKING_CANCELLED, booking=cancelled, event=event, seats=seats
            )
        )
        return CancellationResult(
            booking=cancelled,
            event=event,
            released_tickets=cancelled.tickets,
            released_seat_ids=list(cancelled.seat_ids),
            available_seats=available,
        )
