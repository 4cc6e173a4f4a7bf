from typing import Callable, Dict, List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_dto import BookingDetail
from src.service.booking.domain.entity.event_entity import Event


class ListBookingsUseCase:
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

    @Logger.io(truncate_content=True)
    async def list_by_user(self, *, user_id: int) -> List[BookingDetail]:
        """The user's bookings, newest first, each with its event"""
        async with self.uow_factory() as uow:
            bookings = await uow.booking_query_repo.list_by_user(user_id=user_id)
            events: Dict[int, Optional[Event]] = {}
            for booking in bookings:
                if booking.event_id not in events:
                    events[booking.event_id] = await uow.event_query_repo.get_by_id(
                        event_id=booking.event_id
                    )

        return [
            BookingDetail(booking=booking, event=events[booking.event_id])
            for booking in bookings
        ]
