"""
Integration tests for booking and cancellation through ReservationCoordinator

Every test runs on both storage backends (in-process and SQLite).

Scenarios:
- Generic admission: book, insufficient capacity, duplicate, cancel, re-book
- Seat selection: book seats, seat conflict, cancel releases seats, repeat release is a no-op
- Guards: expired events, booking mode mismatch, ownership
"""

from uuid import UUID

import pytest

from src.platform.exception.exceptions import (
    AlreadyCancelledError,
    DuplicateBookingError,
    EventExpiredError,
    InsufficientCapacityError,
    NotFoundError,
    SeatConflictError,
    ValidationError,
)
from src.service.booking.app.service.seat_allocator import SeatAllocator
from src.service.booking.domain.entity.booking_entity import BookingStatus
from src.service.booking.domain.entity.seat_entity import SeatStatus
from src.service.booking.domain.value_object.seat_layout import SeatLayout, SeatSection
from test.test_constants import UNKNOWN_BOOKING_ID


SMALL_LAYOUT = SeatLayout(
    rows=3,
    seats_per_row=4,
    sections=[
        SeatSection(name='VIP', rows=['A'], price_multiplier=1.5),
        SeatSection(name='General', rows=['B', 'C'], price_multiplier=1.0),
    ],
)


async def _booking_status(uow_factory, booking_id: UUID) -> BookingStatus:
    async with uow_factory() as uow:
        booking = await uow.booking_query_repo.get_by_id(booking_id=booking_id)
    return booking.status


class TestGenericAdmission:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_book_tickets_decrements_counter(self, coordinator, buyer, make_event, load_event):
        """
        Given: an event with 100 seats
        When: the buyer books 3 tickets
        Then: the booking is Confirmed and 97 seats remain
        """
        event = await make_event(total_seats=100)

        detail = await coordinator.book_tickets(user=buyer, event_id=event.id, tickets=3)

        assert detail.booking.status == BookingStatus.CONFIRMED
        assert detail.booking.tickets == 3
        assert detail.booking.user_id == buyer.id
        assert detail.booking.user_email == buyer.email
        assert detail.booking.seat_ids == []
        assert detail.event.available_seats == 97
        assert (await load_event(event.id)).available_seats == 97

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_insufficient_capacity_changes_nothing(
        self, coordinator, buyer, make_event, load_event
    ) -> None:
        """
        Given: an event with 2 seats left
        When: the buyer asks for 3
        Then: InsufficientCapacity reports 2 and no booking is stored
        """
        event = await make_event(total_seats=2)

        with pytest.raises(InsufficientCapacityError) as exc_info:
            await coordinator.book_tickets(user=buyer, event_id=event.id, tickets=3)

        assert exc_info.value.available_seats == 2
        assert exc_info.value.requested == 3
        assert exc_info.value.status_code == 409
        assert (await load_event(event.id)).available_seats == 2

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_exact_remaining_capacity_can_be_booked(
        self, coordinator, buyer, make_event
    ) -> None:
        event = await make_event(total_seats=4)

        detail = await coordinator.book_tickets(user=buyer, event_id=event.id, tickets=4)

        assert detail.event.available_seats == 0

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_second_confirmed_booking_is_rejected(
        self, coordinator, buyer, make_event, load_event
    ) -> None:
        event = await make_event(total_seats=10)
        await coordinator.book_tickets(user=buyer, event_id=event.id, tickets=2)

        with pytest.raises(DuplicateBookingError):
            await coordinator.book_tickets(user=buyer, event_id=event.id, tickets=1)

        assert (await load_event(event.id)).available_seats == 8

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_different_users_can_book_same_event(
        self, coordinator, buyer, another_buyer, make_event
    ) -> None:
        event = await make_event(total_seats=10)

        await coordinator.book_tickets(user=buyer, event_id=event.id, tickets=2)
        detail = await coordinator.book_tickets(user=another_buyer, event_id=event.id, tickets=5)

        assert detail.event.available_seats == 3

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_cancel_restores_capacity_and_allows_rebooking(
        self, coordinator, uow_factory, buyer, make_event, load_event
    ) -> None:
        """
        Given: a Confirmed booking of 4 tickets on a 10 seat event
        When: the buyer cancels it
        Then: 10 seats are available again and the buyer may book anew
        """
        event = await make_event(total_seats=10)
        detail = await coordinator.book_tickets(user=buyer, event_id=event.id, tickets=4)

        result = await coordinator.cancel_booking(user=buyer, booking_id=detail.booking.id)

        assert result.booking.status == BookingStatus.CANCELLED
        assert result.released_tickets == 4
        assert result.released_seat_ids == []
        assert result.available_seats == 10
        assert (await load_event(event.id)).available_seats == 10
        assert await _booking_status(uow_factory, detail.booking.id) == BookingStatus.CANCELLED

        rebooked = await coordinator.book_tickets(user=buyer, event_id=event.id, tickets=1)
        assert rebooked.booking.id != detail.booking.id
        assert rebooked.event.available_seats == 9

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_cancel_twice_raises_already_cancelled(
        self, coordinator, buyer, make_event, load_event
    ) -> None:
        event = await make_event(total_seats=10)
        detail = await coordinator.book_tickets(user=buyer, event_id=event.id, tickets=4)
        await coordinator.cancel_booking(user=buyer, booking_id=detail.booking.id)

        with pytest.raises(AlreadyCancelledError):
            await coordinator.cancel_booking(user=buyer, booking_id=detail.booking.id)

        assert (await load_event(event.id)).available_seats == 10

    @pytest.mark.integration
    @pytest.mark.asyncio
    @pytest.mark.parametrize('tickets', [0, 11])
    async def test_ticket_count_limits(self, coordinator, buyer, make_event, tickets: int) -> None:
        event = await make_event(total_seats=50)

        with pytest.raises(ValidationError):
            await coordinator.book_tickets(user=buyer, event_id=event.id, tickets=tickets)


class TestSeatSelection:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_book_seats_marks_them_booked(
        self, coordinator, buyer, make_event, list_event_seats, load_event
    ) -> None:
        """
        Given: a 12 seat event with VIP row A (x1.5) and General rows B-C
        When: the buyer books A1 and B2
        Then: both seats are booked, total is 150 + 100, and 10 seats remain
        """
        event = await make_event(seat_layout=SMALL_LAYOUT, price=100)
        seats = {seat.label: seat for seat in await list_event_seats(event.id)}

        detail = await coordinator.book_seats(
            user=buyer, event_id=event.id, seat_ids=[seats['B2'].id, seats['A1'].id]
        )

        assert detail.booking.seat_ids == sorted([seats['A1'].id, seats['B2'].id])
        assert detail.booking.tickets == 2
        assert detail.booking.total_amount == 250
        assert [seat.label for seat in detail.seats] == ['A1', 'B2']
        assert detail.event.available_seats == 10

        after = {seat.label: seat for seat in await list_event_seats(event.id)}
        assert after['A1'].status == SeatStatus.BOOKED
        assert after['B2'].status == SeatStatus.BOOKED
        assert after['A2'].status == SeatStatus.AVAILABLE
        assert (await load_event(event.id)).available_seats == 10

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_taken_seat_conflicts_and_nothing_changes(
        self, coordinator, buyer, another_buyer, make_event, list_event_seats, load_event
    ) -> None:
        """
        Given: seat A1 already booked by another user
        When: the buyer requests A1 and A2 together
        Then: SeatConflict names A1, and A2 stays available
        """
        event = await make_event(seat_layout=SMALL_LAYOUT)
        seats = {seat.label: seat for seat in await list_event_seats(event.id)}
        await coordinator.book_seats(
            user=another_buyer, event_id=event.id, seat_ids=[seats['A1'].id]
        )

        with pytest.raises(SeatConflictError) as exc_info:
            await coordinator.book_seats(
                user=buyer, event_id=event.id, seat_ids=[seats['A1'].id, seats['A2'].id]
            )

        assert exc_info.value.seat_ids == [seats['A1'].id]
        after = {seat.label: seat for seat in await list_event_seats(event.id)}
        assert after['A2'].status == SeatStatus.AVAILABLE
        assert (await load_event(event.id)).available_seats == 11

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_unknown_or_foreign_seat_ids_conflict(
        self, coordinator, buyer, make_event, list_event_seats
    ) -> None:
        event = await make_event(seat_layout=SMALL_LAYOUT)
        other = await make_event(seat_layout=SMALL_LAYOUT, name='Other Show')
        foreign = (await list_event_seats(other.id))[0]

        with pytest.raises(SeatConflictError) as exc_info:
            await coordinator.book_seats(
                user=buyer, event_id=event.id, seat_ids=[foreign.id, 999_999]
            )

        assert exc_info.value.seat_ids == sorted([foreign.id, 999_999])

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_duplicate_seat_ids_rejected(
        self, coordinator, buyer, make_event, list_event_seats
    ) -> None:
        event = await make_event(seat_layout=SMALL_LAYOUT)
        seat = (await list_event_seats(event.id))[0]

        with pytest.raises(ValidationError):
            await coordinator.book_seats(user=buyer, event_id=event.id, seat_ids=[seat.id, seat.id])

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_cancel_releases_seats(
        self, coordinator, buyer, make_event, list_event_seats, load_event
    ) -> None:
        event = await make_event(seat_layout=SMALL_LAYOUT)
        seats = {seat.label: seat for seat in await list_event_seats(event.id)}
        detail = await coordinator.book_seats(
            user=buyer, event_id=event.id, seat_ids=[seats['C3'].id, seats['C4'].id]
        )

        result = await coordinator.cancel_booking(user=buyer, booking_id=detail.booking.id)

        assert result.released_seat_ids == sorted([seats['C3'].id, seats['C4'].id])
        assert result.available_seats == 12
        after = {seat.label: seat for seat in await list_event_seats(event.id)}
        assert after['C3'].status == SeatStatus.AVAILABLE
        assert after['C4'].status == SeatStatus.AVAILABLE
        assert (await load_event(event.id)).available_seats == 12

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_generic_booking_refused_for_seated_event(
        self, coordinator, buyer, make_event
    ) -> None:
        event = await make_event(seat_layout=SMALL_LAYOUT)

        with pytest.raises(ValidationError):
            await coordinator.book_tickets(user=buyer, event_id=event.id, tickets=2)

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_seat_booking_refused_for_general_admission(
        self, coordinator, buyer, make_event
    ) -> None:
        event = await make_event(total_seats=10)

        with pytest.raises(ValidationError):
            await coordinator.book_seats(user=buyer, event_id=event.id, seat_ids=[1])

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_releasing_available_seats_changes_nothing(
        self, uow_factory, coordinator, buyer, make_event, list_event_seats, load_event
    ) -> None:
        """
        Given: a seated event where A1 was booked then cancelled and B1 was never booked
        When: both seats are released again
        Then: no seat is reported released, both stay available and the counter is unchanged
        """
        event = await make_event(seat_layout=SMALL_LAYOUT, price=100)
        seats = {seat.label: seat for seat in await list_event_seats(event.id)}
        detail = await coordinator.book_seats(
            user=buyer, event_id=event.id, seat_ids=[seats['A1'].id]
        )
        await coordinator.cancel_booking(user=buyer, booking_id=detail.booking.id)

        async with uow_factory() as uow:
            released = await SeatAllocator(uow).release_seats(
                seat_ids=[seats['A1'].id, seats['B1'].id]
            )
            await uow.commit()

        assert released == 0
        after = {seat.label: seat for seat in await list_event_seats(event.id)}
        assert after['A1'].status == SeatStatus.AVAILABLE
        assert after['B1'].status == SeatStatus.AVAILABLE
        assert (await load_event(event.id)).available_seats == SMALL_LAYOUT.capacity


class TestGuards:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_unknown_event(self, coordinator, buyer) -> None:
        with pytest.raises(NotFoundError):
            await coordinator.book_tickets(user=buyer, event_id=424242, tickets=1)

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_past_event_cannot_be_booked(
        self, coordinator, buyer, make_event, load_event
    ) -> None:
        event = await make_event(total_seats=10, days_from_now=-1)

        with pytest.raises(EventExpiredError):
            await coordinator.book_tickets(user=buyer, event_id=event.id, tickets=1)

        assert (await load_event(event.id)).available_seats == 10

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_booking_of_started_event_cannot_be_cancelled(
        self, coordinator, uow_factory, buyer, make_event
    ) -> None:
        """
        Given: a Confirmed booking whose event has since started
        When: the buyer cancels
        Then: EventExpired, and the booking stays Confirmed
        """
        event = await make_event(total_seats=10, days_from_now=1)
        detail = await coordinator.book_tickets(user=buyer, event_id=event.id, tickets=2)
        async with uow_factory() as uow:
            started = await uow.event_query_repo.get_by_id(event_id=event.id)
            started.date = started.date.replace(year=started.date.year - 1)
            await uow.event_command_repo.update_details(event=started)
            await uow.commit()

        with pytest.raises(EventExpiredError):
            await coordinator.cancel_booking(user=buyer, booking_id=detail.booking.id)

        assert await _booking_status(uow_factory, detail.booking.id) == BookingStatus.CONFIRMED

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_other_users_booking_is_not_found(
        self, coordinator, uow_factory, buyer, another_buyer, make_event
    ) -> None:
        event = await make_event(total_seats=10)
        detail = await coordinator.book_tickets(user=buyer, event_id=event.id, tickets=1)

        with pytest.raises(NotFoundError):
            await coordinator.cancel_booking(user=another_buyer, booking_id=detail.booking.id)

        assert await _booking_status(uow_factory, detail.booking.id) == BookingStatus.CONFIRMED

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_unknown_booking_is_not_found(self, coordinator, buyer) -> None:
        with pytest.raises(NotFoundError):
            await coordinator.cancel_booking(user=buyer, booking_id=UNKNOWN_BOOKING_ID)

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_notifier_receives_confirmation_and_cancellation(
        self, coordinator, notifier, buyer, make_event
    ) -> None:
        event = await make_event(total_seats=10)
        detail = await coordinator.book_tickets(user=buyer, event_id=event.id, tickets=2)
        await coordinator.cancel_booking(user=buyer, booking_id=detail.booking.id)

        subjects = [message['subject'] for message in notifier.sent_notifications]
        assert subjects == [
            f'Booking Confirmed - {event.name}',
            f'Booking Cancelled - {event.name}',
        ]
        assert {message['to'] for message in notifier.sent_notifications} == {buyer.email}
