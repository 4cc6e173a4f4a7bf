from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from src.service.booking.app.dto.booking_dto import BookingDetail, CancellationResult
from src.service.booking.driving_adapter.http_controller.schema.event_schema import SeatResponse


class BookingCreateRequest(BaseModel):
    event_id: int
    tickets: Optional[int] = None  # Generic admission
    seat_ids: Optional[List[int]] = Field(default=None)  # Seat selection

    model_config = {
        'json_schema_extra': {
            'examples': [
                {'event_id': 1, 'tickets': 3},
                {'event_id': 2, 'seat_ids': [11, 12]},
            ]
        }
    }

    @model_validator(mode='after')
    def check_one_mode(self) -> 'BookingCreateRequest':
        if (self.tickets is None) == (self.seat_ids is None):
            raise ValueError('Provide either tickets or seat_ids')
        return self


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'event_id': 1,
                'tickets': 2,
                'seat_ids': [],
                'total_amount': 0,
                'status': 'Confirmed',
                'created_at': '2030-01-10T10:30:00Z',
            }
        },
    }

    id: UUID  # UUID7
    user_id: int
    event_id: int
    user_name: str
    user_email: str
    tickets: int
    seat_ids: List[int]
    total_amount: int
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookingEventSummary(BaseModel):
    id: int
    name: str
    date: datetime
    location: str


class BookingDetailResponse(BookingResponse):
    event: Optional[BookingEventSummary] = None
    seats: List[SeatResponse] = []
    available_seats: Optional[int] = None

    @classmethod
    def from_detail(cls, detail: BookingDetail) -> 'BookingDetailResponse':
        booking = detail.booking
        event = detail.event
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            event_id=booking.event_id,
            user_name=booking.user_name,
            user_email=booking.user_email,
            tickets=booking.tickets,
            seat_ids=list(booking.seat_ids),
            total_amount=booking.total_amount,
            status=booking.status.value,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
            event=(
                BookingEventSummary(
                    id=event.id or 0, name=event.name, date=event.date, location=event.location
                )
                if event
                else None
            ),
            seats=[SeatResponse.from_entity(seat) for seat in detail.seats],
            available_seats=event.available_seats if event else None,
        )


class CancelBookingResponse(BaseModel):
    id: UUID
    status: str
    released_tickets: int
    released_seat_ids: List[int]
    available_seats: int
    message: str = 'Booking cancelled'

    @classmethod
    def from_result(cls, result: CancellationResult) -> 'CancelBookingResponse':
        return cls(
            id=result.booking.id,
            status=result.booking.status.value,
            released_tickets=result.released_tickets,
            released_seat_ids=result.released_seat_ids,
            available_seats=result.available_seats,
        )
