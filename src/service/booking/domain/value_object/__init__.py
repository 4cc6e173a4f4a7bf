"""Booking Domain Value Objects"""

from src.service.booking.domain.value_object.seat_layout import SeatLayout, SeatSection

__all__ = ['SeatLayout', 'SeatSection']
