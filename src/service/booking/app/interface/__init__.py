"""Booking application ports"""

from src.service.booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.booking.app.interface.i_booking_notifier import IBookingNotifier
from src.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.booking.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.booking.app.interface.i_seat_command_repo import ISeatCommandRepo
from src.service.booking.app.interface.i_seat_query_repo import ISeatQueryRepo

__all__ = [
    'IBookingCommandRepo',
    'IBookingNotifier',
    'IBookingQueryRepo',
    'IEventCommandRepo',
    'IEventQueryRepo',
    'ISeatCommandRepo',
    'ISeatQueryRepo',
]
