from datetime import datetime, timezone
from typing import Callable, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.booking.domain.entity.event_entity import Event


class ListEventsUseCase:
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
    async def list_upcoming(self) -> List[Event]:
        """Events that have not started yet, soonest first"""
        async with self.uow_factory() as uow:
            events = await uow.event_query_repo.list_upcoming(now=datetime.now(timezone.utc))

        Logger.base.info(f'📋 [LIST_EVENTS] Found {len(events)} upcoming events')
        return events
