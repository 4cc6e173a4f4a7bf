from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.command.create_event_use_case import CreateEventUseCase
from src.service.booking.app.command.create_seats_use_case import CreateSeatsUseCase
from src.service.booking.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.booking.app.command.update_event_use_case import UpdateEventUseCase
from src.service.booking.app.dto.seat_dto import SeatSpec
from src.service.booking.app.query.get_event_use_case import GetEventUseCase
from src.service.booking.app.query.list_events_use_case import ListEventsUseCase
from src.service.booking.app.query.list_seats_use_case import ListSeatsUseCase
from src.service.booking.domain.entity.user_entity import CurrentUser
from src.service.booking.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.booking.driving_adapter.http_controller.schema.event_schema import (
    EventCreateRequest,
    EventResponse,
    EventUpdateRequest,
    SeatMapResponse,
    SeatResponse,
    SeatRowResponse,
    SeatsCreateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('', response_model=List[EventResponse])
@Logger.io
async def list_events(
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.list_upcoming()
    return [EventResponse.from_entity(event) for event in events]


@router.get('/{event_id}')
@Logger.io
async def get_event(
    event_id: int,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventResponse:
    return EventResponse.from_entity(await use_case.get_by_id(event_id=event_id))


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: EventCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventResponse:
    with tracer.start_as_current_span('controller.create_event') as span:
        span.set_attribute('admin.id', current_user.id)
        event = await use_case.create(
            name=request.name,
            date=request.date,
            location=request.location,
            description=request.description,
            total_seats=request.total_seats,
            price=request.price,
            seat_layout=request.seat_layout.to_value_object() if request.seat_layout else None,
        )
        span.set_attribute('event.id', event.id or 0)
        return EventResponse.from_entity(event)


@router.patch('/{event_id}')
@Logger.io
async def update_event(
    event_id: int,
    request: EventUpdateRequest,
    current_user: CurrentUser = Depends(require_admin),
    use_case: UpdateEventUseCase = Depends(UpdateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.update(event_id=event_id, **request.model_dump(exclude_unset=True))
    return EventResponse.from_entity(event)


@router.delete('/{event_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_event(
    event_id: int,
    current_user: CurrentUser = Depends(require_admin),
    use_case: DeleteEventUseCase = Depends(DeleteEventUseCase.depends),
) -> None:
    await use_case.delete(event_id=event_id)


@router.post('/{event_id}/seats', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_seats(
    event_id: int,
    request: SeatsCreateRequest,
    current_user: CurrentUser = Depends(require_admin),
    use_case: CreateSeatsUseCase = Depends(CreateSeatsUseCase.depends),
) -> List[SeatResponse]:
    seats = await use_case.create(
        event_id=event_id,
        seats=[
            SeatSpec(
                row=item.row,
                seat_number=item.seat_number,
                price=item.price,
                section=item.section,
                seat_type=item.seat_type,
            )
            for item in request.seats
        ],
    )
    return [SeatResponse.from_entity(seat) for seat in seats]


@router.get('/{event_id}/seats')
@Logger.io
async def list_seats(
    event_id: int,
    section: Optional[str] = Query(default=None),
    row: Optional[str] = Query(default=None),
    use_case: ListSeatsUseCase = Depends(ListSeatsUseCase.depends),
) -> SeatMapResponse:
    groups = await use_case.list_by_event(event_id=event_id, section=section, row=row)
    return SeatMapResponse(
        event_id=event_id,
        rows=[
            SeatRowResponse(
                section=group.section,
                row=group.row,
                available_count=group.available_count,
                seats=[SeatResponse.from_entity(seat) for seat in group.seats],
            )
            for group in groups
        ],
    )
