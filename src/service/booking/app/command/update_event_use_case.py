from datetime import datetime
from typing import Callable, Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.entity.event_entity import Event
from src.service.booking.domain.validators import (
    DateValidators,
    NumericValidators,
    StringValidators,
)


class UpdateEventUseCase:
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

    @Logger.io
    async def update(
        self,
        *,
        event_id: int,
        name: Optional[str] = None,
        date: Optional[datetime] = None,
        location: Optional[str] = None,
        description: Optional[str] = None,
        price: Optional[int] = None,
        total_seats: Optional[int] = None,
    ) -> Event:
        """
        Update event details (admin).

        A total_seats change shifts available_seats by the same delta in one
        conditional update; it is refused when the event would end up with
        fewer seats than are already booked.
        """
        changes: dict = {}
        if name is not None:
            changes['name'] = StringValidators.validate_event_name(name)
        if location is not None:
            changes['location'] = StringValidators.validate_event_location(location)
        if description is not None:
            changes['description'] = StringValidators.validate_event_description(description)
        if date is not None:
            changes['date'] = DateValidators.validate_future_date(date)
        if price is not None:
            NumericValidators.validate_price(price)
            changes['price'] = price
        if total_seats is not None:
            NumericValidators.validate_total_seats(total_seats)

        async with self.uow_factory() as uow:
            event = await uow.event_query_repo.get_by_id(event_id=event_id)
            if not event:
                raise NotFoundError('Event not found')

            if changes:
                event = await uow.event_command_repo.update_details(
                    event=attrs.evolve(event, **changes)
                )

            if total_seats is not None and total_seats != event.total_seats:
                if event.has_seat_selection:
                    seat_count = await uow.seat_query_repo.count_by_event(event_id=event_id)
                    if total_seats < seat_count:
                        raise ValidationError(
                            f'Total seats cannot be lower than the {seat_count} seats on the seat map'
                        )
                resized = await uow.event_command_repo.resize(
                    event_id=event_id, delta=total_seats - event.total_seats
                )
                if resized is None:
                    raise ValidationError(
                        f'Total seats cannot be lower than the {event.tickets_held} tickets already booked'
                    )
                event = resized

            await uow.commit()

        Logger.base.info(f'✏️  [UPDATE_EVENT] Event {event_id} updated')
        return event
