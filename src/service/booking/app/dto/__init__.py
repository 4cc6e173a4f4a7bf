"""Application layer DTOs"""

from src.service.booking.app.dto.booking_dto import (
    BookingDetail,
    CancellationResult,
    SeatReservation,
)
from src.service.booking.app.dto.seat_dto import SeatRowGroup, SeatSpec

__all__ = [
    'BookingDetail',
    'CancellationResult',
    'SeatReservation',
    'SeatRowGroup',
    'SeatSpec',
]
