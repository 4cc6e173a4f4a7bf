from typing import List, Optional

import attrs

from src.service.booking.domain.entity.seat_entity import Seat, SeatStatus, SeatType


@attrs.frozen
class SeatRowGroup:
    """Seats of one (section, row), ordered by seat number"""

    section: str
    row: str
    seats: List[Seat]

    @property
    def available_count(self) -> int:
        return sum(1 for seat in self.seats if seat.status == SeatStatus.AVAILABLE)


@attrs.frozen
class SeatSpec:
    """One seat to create through the admin seat setup"""

    row: str
    seat_number: int
    price: int
    section: str = 'General'
    seat_type: Optional[SeatType] = None
