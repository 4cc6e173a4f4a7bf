from datetime import datetime
from typing import Callable, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.entity.event_entity import Event
from src.service.booking.domain.seat_layout_domain import iter_layout_seats
from src.service.booking.domain.validators import (
    BusinessRuleValidators,
    DateValidators,
    NumericValidators,
    StringValidators,
)
from src.service.booking.domain.value_object.seat_layout import SeatLayout


class CreateEventUseCase:
    """
    Create an event (admin).

    With a seat layout the event switches to seat selection: one seat per
    (row, number) is generated and total_seats becomes the seat count.
    """

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
    async def create(
        self,
        *,
        name: str,
        date: datetime,
        location: str,
        total_seats: int,
        price: int = 0,
        description: Optional[str] = None,
        seat_layout: Optional[SeatLayout] = None,
    ) -> Event:
        name = StringValidators.validate_event_name(name)
        location = StringValidators.validate_event_location(location)
        description = StringValidators.validate_event_description(description)
        date = DateValidators.validate_future_date(date)
        NumericValidators.validate_price(price)
        if seat_layout is not None:
            BusinessRuleValidators.validate_seat_layout(seat_layout)
            total_seats = seat_layout.capacity
        NumericValidators.validate_total_seats(total_seats)

        event = Event.create(
            name=name,
            date=date,
            location=location,
            description=description,
            total_seats=total_seats,
            price=price,
            seat_layout=seat_layout,
        )

        async with self.uow_factory() as uow:
            event = await uow.event_command_repo.create(event=event)
            if seat_layout is not None:
                seats = list(
                    iter_layout_seats(event_id=event.id, base_price=price, layout=seat_layout)
                )
                await uow.seat_command_repo.create_batch(seats=seats)
            await uow.commit()

        Logger.base.info(
            f'🎪 [CREATE_EVENT] Event {event.id} "{event.name}" with {event.total_seats} seats'
            f'{" (seat selection)" if event.has_seat_selection else ""}'
        )
        return event
