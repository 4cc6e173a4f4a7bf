"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.booking.app.command import (
    create_event_use_case,
    create_seats_use_case,
    delete_event_use_case,
    reservation_coordinator,
    update_event_use_case,
)
from src.service.booking.app.query import (
    get_booking_use_case,
    get_event_use_case,
    list_bookings_use_case,
    list_events_use_case,
    list_seats_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    reservation_coordinator,
    create_event_use_case,
    update_event_use_case,
    delete_event_use_case,
    create_seats_use_case,
    list_events_use_case,
    get_event_use_case,
    list_seats_use_case,
    list_bookings_use_case,
    get_booking_use_case,
]
