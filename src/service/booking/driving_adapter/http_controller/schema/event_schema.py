from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.booking.domain.entity.event_entity import Event
from src.service.booking.domain.entity.seat_entity import Seat, SeatType
from src.service.booking.domain.value_object.seat_layout import SeatLayout, SeatSection


class SeatSectionSchema(BaseModel):
    name: str
    rows: List[str]
    price_multiplier: float = 1.0


class SeatLayoutSchema(BaseModel):
    rows: int = Field(ge=1, le=100)
    seats_per_row: int = Field(ge=1, le=200)
    sections: List[SeatSectionSchema] = []

    def to_value_object(self) -> SeatLayout:
        return SeatLayout(
            rows=self.rows,
            seats_per_row=self.seats_per_row,
            sections=[
                SeatSection(name=s.name, rows=list(s.rows), price_multiplier=s.price_multiplier)
                for s in self.sections
            ],
        )


class EventCreateRequest(BaseModel):
    name: str
    date: datetime
    location: str
    description: Optional[str] = None
    total_seats: int = 0  # Ignored when seat_layout is given
    price: int = 0
    seat_layout: Optional[SeatLayoutSchema] = None

    model_config = {
        'json_schema_extra': {
            'example': {
                'name': 'Summer Music Festival',
                'date': '2030-07-15T19:00:00Z',
                'location': 'Central Park, New York',
                'description': 'Outdoor festival',
                'price': 100,
                'seat_layout': {
                    'rows': 8,
                    'seats_per_row': 10,
                    'sections': [
                        {'name': 'VIP', 'rows': ['A', 'B'], 'price_multiplier': 1.5},
                        {'name': 'Premium', 'rows': ['C', 'D', 'E'], 'price_multiplier': 1.2},
                        {'name': 'General', 'rows': ['F', 'G', 'H'], 'price_multiplier': 1.0},
                    ],
                },
            }
        }
    }


class EventUpdateRequest(BaseModel):
    name: Optional[str] = None
    date: Optional[datetime] = None
    location: Optional[str] = None
    description: Optional[str] = None
    price: Optional[int] = None
    total_seats: Optional[int] = None


class EventResponse(BaseModel):
    id: int
    name: str
    date: datetime
    location: str
    description: Optional[str] = None
    total_seats: int
    available_seats: int
    price: int
    has_seat_selection: bool
    seat_layout: Optional[SeatLayoutSchema] = None

    @classmethod
    def from_entity(cls, event: Event) -> 'EventResponse':
        return cls(
            id=event.id or 0,
            name=event.name,
            date=event.date,
            location=event.location,
            description=event.description,
            total_seats=event.total_seats,
            available_seats=event.available_seats,
            price=event.price,
            has_seat_selection=event.has_seat_selection,
            seat_layout=(
                SeatLayoutSchema.model_validate(event.seat_layout.to_dict())
                if event.seat_layout
                else None
            ),
        )


class SeatCreateItem(BaseModel):
    row: str
    seat_number: int
    price: int
    section: str = 'General'
    seat_type: Optional[SeatType] = None


class SeatsCreateRequest(BaseModel):
    seats: List[SeatCreateItem]


class SeatResponse(BaseModel):
    id: int
    row: str
    seat_number: int
    section: str
    price: int
    seat_type: str
    status: str

    @classmethod
    def from_entity(cls, seat: Seat) -> 'SeatResponse':
        return cls(
            id=seat.id or 0,
            row=seat.row,
            seat_number=seat.seat_number,
            section=seat.section,
            price=seat.price,
            seat_type=seat.seat_type.value,
            status=seat.status.value,
        )


class SeatRowResponse(BaseModel):
    section: str
    row: str
    available_count: int
    seats: List[SeatResponse]


class SeatMapResponse(BaseModel):
    event_id: int
    rows: List[SeatRowResponse]
