"""
Booking notification domain event

Emitted by the reservation coordinator after a booking or cancellation has
been committed. Notifiers deliver it; delivery never affects the booking.
"""

from datetime import datetime
from enum import StrEnum
from typing import Any, List
from uuid import UUID

import attrs

from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.event_entity import Event
from src.service.booking.domain.entity.seat_entity import Seat


class NotificationKind(StrEnum):
    BOOKING_CONFIRMED = 'booking_confirmed'
    BOOKING_CANCELLED = 'booking_cancelled'


@attrs.frozen
class BookingNotification:
    booking_id: UUID
    kind: NotificationKind
    user_name: str
    user_email: str
    event_name: str
    event_date: datetime
    event_location: str
    tickets: int
    seats: List[str] = attrs.field(factory=list)
    total_amount: int = 0

    @property
    def subject(self) -> str:
        if self.kind == NotificationKind.BOOKING_CONFIRMED:
            return f'Booking Confirmed - {self.event_name}'
        return f'Booking Cancelled - {self.event_name}'

    @classmethod
    def from_booking(
        cls,
        *,
        kind: NotificationKind,
        booking: Booking,
        event: Event,
        seats: List[Seat],
    ) -> 'BookingNotification':
        return cls(
            booking_id=booking.id,
            kind=kind,
            user_name=booking.user_name,
            user_email=booking.user_email,
            event_name=event.name,
            event_date=event.date,
            event_location=event.location,
            tickets=booking.tickets,
            seats=[seat.label for seat in sorted(seats, key=lambda s: s.sort_key)],
            total_amount=booking.total_amount,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            'booking_id': str(self.booking_id),
            'kind': self.kind.value,
            'subject': self.subject,
            'user_name': self.user_name,
            'user_email': self.user_email,
            'event_name': self.event_name,
            'event_date': self.event_date.isoformat(),
            'event_location': self.event_location,
            'tickets': self.tickets,
            'seats': list(self.seats),
            'total_amount': self.total_amount,
        }
