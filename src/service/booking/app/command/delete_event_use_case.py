from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger


class DeleteEventUseCase:
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
    async def delete(self, *, event_id: int) -> None:
        async with self.uow_factory() as uow:
            event = await uow.event_query_repo.get_by_id(event_id=event_id)
            if not event:
                raise NotFoundError('Event not found')

            # Early exit only; the conditional delete is what refuses a booked event
            active = await uow.booking_query_repo.count_active_by_event(event_id=event_id)
            if active:
                raise ConflictError(f'Event has {active} confirmed bookings')

            if not await uow.event_command_repo.delete(event_id=event_id):
                raise ConflictError('Event has tickets held by confirmed bookings')
            removed_seats = await uow.seat_command_repo.delete_by_event(event_id=event_id)
            await uow.commit()

        Logger.base.info(f'🗑️  [DELETE_EVENT] Event {event_id} deleted with {removed_seats} seats')
