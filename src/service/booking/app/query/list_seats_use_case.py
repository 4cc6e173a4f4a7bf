from itertools import groupby
from typing import Callable, List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.seat_dto import SeatRowGroup


class ListSeatsUseCase:
    """Seat map of an event, grouped by (section, row)"""

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
    async def list_by_event(
        self, *, event_id: int, section: Optional[str] = None, row: Optional[str] = None
    ) -> List[SeatRowGroup]:
        async with self.uow_factory() as uow:
            event = await uow.event_query_repo.get_by_id(event_id=event_id)
            if not event:
                raise NotFoundError('Event not found')
            seats = await uow.seat_query_repo.list_by_event(
                event_id=event_id, section=section, row=row.upper() if row else None
            )

        # Repository order is row then seat number, so groups come out in row order
        return [
            SeatRowGroup(section=seat_section, row=seat_row, seats=list(group))
            for (seat_section, seat_row), group in groupby(
                seats, key=lambda seat: (seat.section, seat.row)
            )
        ]
