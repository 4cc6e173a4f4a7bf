from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.command.reservation_coordinator import ReservationCoordinator
from src.service.booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.booking.domain.entity.user_entity import CurrentUser
from src.service.booking.driving_adapter.http_controller.auth.role_auth import get_current_user
from src.service.booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingDetailResponse,
    CancelBookingResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    coordinator: ReservationCoordinator = Depends(ReservationCoordinator.depends),
) -> BookingDetailResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('event_id', request.event_id)
        span.set_attribute('user_id', current_user.id)

        if request.seat_ids is not None:
            detail = await coordinator.book_seats(
                user=current_user, event_id=request.event_id, seat_ids=request.seat_ids
            )
        else:
            detail = await coordinator.book_tickets(
                user=current_user, event_id=request.event_id, tickets=request.tickets or 0
            )

        span.set_attribute('booking.id', str(detail.booking.id))
        return BookingDetailResponse.from_detail(detail)


@router.get('/my_booking', response_model=List[BookingDetailResponse])
@Logger.io
async def list_my_bookings(
    current_user: CurrentUser = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingDetailResponse]:
    details = await use_case.list_by_user(user_id=current_user.id)
    return [BookingDetailResponse.from_detail(detail) for detail in details]


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingDetailResponse:
    detail = await use_case.get_by_id(booking_id=booking_id, user_id=current_user.id)
    return BookingDetailResponse.from_detail(detail)


@router.patch('/{booking_id}/cancel')
@Logger.io
async def cancel_booking(
    booking_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    coordinator: ReservationCoordinator = Depends(ReservationCoordinator.depends),
) -> CancelBookingResponse:
    result = await coordinator.cancel_booking(user=current_user, booking_id=booking_id)
    return CancelBookingResponse.from_result(result)
