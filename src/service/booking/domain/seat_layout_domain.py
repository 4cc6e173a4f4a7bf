"""
Seat Layout Domain
Pure seat generation from an event's seat layout, no storage involved.
"""

from typing import Iterator

from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.entity.seat_entity import DEFAULT_SECTION, Seat, SeatType
from src.service.booking.domain.value_object.seat_layout import SeatLayout


def row_label(index: int) -> str:
    """0 -> A, 25 -> Z, 26 -> AA"""
    label = ''
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        label = chr(ord('A') + remainder) + label
    return label


@Logger.io(truncate_content=True)
def iter_layout_seats(*, event_id: int, base_price: int, layout: SeatLayout) -> Iterator[Seat]:
    for row_index in range(layout.rows):
        row = row_label(row_index)
        section = layout.section_for(row)
        section_name = section.name if section else DEFAULT_SECTION
        multiplier = section.price_multiplier if section else 1.0
        price = round(base_price * multiplier)
        seat_type = SeatType.from_section_name(section_name)

        for seat_number in range(1, layout.seats_per_row + 1):
            yield Seat(
                event_id=event_id,
                seat_number=seat_number,
                row=row,
                section=section_name,
                price=price,
                seat_type=seat_type,
            )
