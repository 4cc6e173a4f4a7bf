"""
Row/model -> entity conversion shared by the SQLAlchemy repositories

Accepts ORM instances and Core `Row`s alike (same attribute names). SQLite
hands back naive datetimes, so every timestamp goes through `ensure_aware`.
"""

from typing import Any, List, Optional

from src.service.booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.booking.domain.entity.event_entity import Event
from src.service.booking.domain.entity.seat_entity import Seat, SeatStatus, SeatType
from src.service.booking.domain.validators import ensure_aware
from src.service.booking.domain.value_object.seat_layout import SeatLayout


def _aware(value: Any) -> Any:
    return ensure_aware(value) if value is not None else None


def to_event(row: Any) -> Event:
    return Event(
        id=row.id,
        name=row.name,
        date=ensure_aware(row.date),
        location=row.location,
        description=row.description,
        total_seats=row.total_seats,
        available_seats=row.available_seats,
        price=row.price,
        seat_layout=SeatLayout.from_dict(row.seat_layout) if row.seat_layout else None,
        has_seat_selection=bool(row.has_seat_selection),
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def to_seat(row: Any) -> Seat:
    return Seat(
        id=row.id,
        event_id=row.event_id,
        seat_number=row.seat_number,
        row=row.row,
        section=row.section,
        price=row.price,
        seat_type=SeatType(row.seat_type),
        status=SeatStatus(row.status),
    )


def to_booking(row: Any, seat_ids: Optional[List[int]] = None) -> Booking:
    return Booking(
        id=row.id,
        user_id=row.user_id,
        event_id=row.event_id,
        user_name=row.user_name,
        user_email=row.user_email,
        tickets=row.tickets,
        seat_ids=sorted(seat_ids or []),
        total_amount=row.total_amount,
        status=BookingStatus(row.status),
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )
