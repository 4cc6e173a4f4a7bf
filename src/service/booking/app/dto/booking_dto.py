from typing import List, Optional

import attrs

from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.event_entity import Event
from src.service.booking.domain.entity.seat_entity import Seat


@attrs.frozen
class SeatReservation:
    """Seats transitioned to booked by the seat allocator"""

    seats: List[Seat]
    total_amount: int

    @property
    def seat_ids(self) -> List[int]:
        return sorted(seat.id for seat in self.seats)  # type: ignore[type-var]


@attrs.frozen
class BookingDetail:
    booking: Booking
    event: Optional[Event]  # None once a cancelled booking's event was deleted
    seats: List[Seat] = attrs.field(factory=list)


@attrs.frozen
class CancellationResult:
    booking: Booking
    event: Event
    released_tickets: int
    released_seat_ids: List[int]
    available_seats: int
