from typing import Callable, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.seat_dto import SeatSpec
from src.service.booking.domain.entity.seat_entity import Seat, SeatType
from src.service.booking.domain.validators import NumericValidators


class CreateSeatsUseCase:
    """Bulk seat setup for an event (admin); enables seat selection on it"""

    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    @staticmethod
    def _validate_specs(specs: List[SeatSpec]) -> None:
        if not specs:
            raise ValidationError('At least one seat is required')
        positions: set[tuple[str, int]] = set()
        for spec in specs:
            if not spec.row.strip():
                raise ValidationError('Seat row is required')
            if spec.seat_number < 1:
                raise ValidationError('Seat number must be at least 1')
            NumericValidators.validate_price(spec.price, 'Seat price')
            position = (spec.row.strip().upper(), spec.seat_number)
            if position in positions:
                raise ValidationError(f'Duplicate seat {position[0]}{position[1]} in request')
            positions.add(position)

    @Logger.io(truncate_content=True)
    async def create(self, *, event_id: int, seats: List[SeatSpec]) -> List[Seat]:
        self._validate_specs(seats)

        async with self.uow_factory() as uow:
            # Write the event row before counting: a concurrent setup for this event
            # waits here until this unit ends, then counts the seats it added
            event = await uow.event_command_repo.enable_seat_selection(event_id=event_id)
            if not event:
                raise NotFoundError('Event not found')

            existing = await uow.seat_query_repo.count_by_event(event_id=event_id)
            if existing + len(seats) > event.total_seats:
                raise ValidationError(
                    f'Event has {event.total_seats} total seats; '
                    f'{existing} exist and {len(seats)} more were requested'
                )

            created = await uow.seat_command_repo.create_batch(
                seats=[
                    Seat(
                        event_id=event_id,
                        row=spec.row.strip().upper(),
                        seat_number=spec.seat_number,
                        section=spec.section,
                        price=spec.price,
                        seat_type=spec.seat_type or SeatType.from_section_name(spec.section),
                    )
                    for spec in seats
                ]
            )
            await uow.commit()

        Logger.base.info(f'💺 [CREATE_SEATS] {len(created)} seats added to event {event_id}')
        return created
