from datetime import datetime, timezone
from typing import Optional

import attrs

from src.service.booking.domain.value_object.seat_layout import SeatLayout


@attrs.define
class Event:
    name: str
    date: datetime
    location: str
    total_seats: int
    available_seats: int
    price: int = 0
    description: Optional[str] = None
    seat_layout: Optional[SeatLayout] = None
    has_seat_selection: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        name: str,
        date: datetime,
        location: str,
        total_seats: int,
        price: int = 0,
        description: Optional[str] = None,
        seat_layout: Optional[SeatLayout] = None,
    ) -> 'Event':
        now = datetime.now(timezone.utc)
        return cls(
            name=name.strip(),
            date=date,
            location=location.strip(),
            description=description,
            total_seats=total_seats,
            available_seats=total_seats,
            price=price,
            seat_layout=seat_layout,
            has_seat_selection=seat_layout is not None,
            created_at=now,
            updated_at=now,
        )

    @property
    def tickets_held(self) -> int:
        """Tickets currently held by Confirmed bookings"""
        return self.total_seats - self.available_seats

    def is_past(self, now: Optional[datetime] = None) -> bool:
        return self.date <= (now or datetime.now(timezone.utc))
