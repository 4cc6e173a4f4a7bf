from enum import StrEnum
from typing import Optional

import attrs


class SeatStatus(StrEnum):
    AVAILABLE = 'available'
    BOOKED = 'booked'
    RESERVED = 'reserved'


class SeatType(StrEnum):
    REGULAR = 'regular'
    VIP = 'vip'
    PREMIUM = 'premium'

    @classmethod
    def from_section_name(cls, section_name: str) -> 'SeatType':
        lowered = section_name.lower()
        if 'vip' in lowered:
            return cls.VIP
        if 'premium' in lowered:
            return cls.PREMIUM
        return cls.REGULAR


DEFAULT_SECTION = 'General'


@attrs.define
class Seat:
    event_id: int
    seat_number: int
    row: str
    price: int
    section: str = DEFAULT_SECTION
    seat_type: SeatType = SeatType.REGULAR
    status: SeatStatus = SeatStatus.AVAILABLE
    id: Optional[int] = None

    @property
    def label(self) -> str:
        return f'{self.row}{self.seat_number}'

    @property
    def sort_key(self) -> tuple[int, str, int]:
        """Row order A..Z, AA.., then seat number"""
        return (len(self.row), self.row, self.seat_number)
