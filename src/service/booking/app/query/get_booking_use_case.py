from typing import Callable, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.booking_dto import BookingDetail
from src.service.booking.app.service.booking_ledger import BookingLedger


class GetBookingUseCase:
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
    async def get_by_id(self, *, booking_id: UUID, user_id: int) -> BookingDetail:
        async with self.uow_factory() as uow:
            booking = await BookingLedger(uow).get_owned_booking(
                booking_id=booking_id, user_id=user_id
            )
            event = await uow.event_query_repo.get_by_id(event_id=booking.event_id)
            seats = await uow.seat_query_repo.get_by_ids(seat_ids=booking.seat_ids)

        return BookingDetail(
            booking=booking,
            event=event,
            seats=sorted(seats, key=lambda seat: seat.sort_key),
        )
