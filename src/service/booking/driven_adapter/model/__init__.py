"""SQLAlchemy models for the booking service"""

from src.service.booking.driven_adapter.model.booking_model import BookingModel, BookingSeatModel
from src.service.booking.driven_adapter.model.event_model import EventModel
from src.service.booking.driven_adapter.model.seat_model import SeatModel

__all__ = ['BookingModel', 'BookingSeatModel', 'EventModel', 'SeatModel']
