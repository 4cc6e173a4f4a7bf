"""
Unit of Work Pattern - one transaction across the booking repositories

Architecture:
- UoW owns the session (or in-process store lock) lifecycle
- UoW owns commit/rollback
- Repositories share the UoW's session
- Use cases coordinate several repositories through one UoW

Leaving the `async with` block without commit rolls everything back.
"""

from __future__ import annotations

import abc
import copy
from typing import TYPE_CHECKING, Any, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from src.service.booking.app.interface.i_booking_command_repo import IBookingCommandRepo
    from src.service.booking.app.interface.i_booking_query_repo import IBookingQueryRepo
    from src.service.booking.app.interface.i_event_command_repo import IEventCommandRepo
    from src.service.booking.app.interface.i_event_query_repo import IEventQueryRepo
    from src.service.booking.app.interface.i_seat_command_repo import ISeatCommandRepo
    from src.service.booking.app.interface.i_seat_query_repo import ISeatQueryRepo
    from src.service.booking.driven_adapter.memory.in_memory_state import InMemoryState


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the Booking Service

    Usage:
        async with uow:
            new_available = await uow.event_command_repo.reserve_tickets(...)
            booking = await uow.booking_command_repo.create(...)
            await uow.commit()
    """

    # Event repositories
    event_command_repo: IEventCommandRepo
    event_query_repo: IEventQueryRepo

    # Seat repositories
    seat_command_repo: ISeatCommandRepo
    seat_query_repo: ISeatQueryRepo

    # Booking repositories
    booking_command_repo: IBookingCommandRepo
    booking_query_repo: IBookingQueryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.rollback()

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    One AsyncSession (one database transaction) per `async with` block.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.booking.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.booking.driven_adapter.repo.booking_query_repo_impl import (
            BookingQueryRepoImpl,
        )
        from src.service.booking.driven_adapter.repo.event_command_repo_impl import (
            EventCommandRepoImpl,
        )
        from src.service.booking.driven_adapter.repo.event_query_repo_impl import (
            EventQueryRepoImpl,
        )
        from src.service.booking.driven_adapter.repo.seat_command_repo_impl import (
            SeatCommandRepoImpl,
        )
        from src.service.booking.driven_adapter.repo.seat_query_repo_impl import (
            SeatQueryRepoImpl,
        )

        self.session = self.session_factory()

        # Create repositories with shared session
        self.event_command_repo = EventCommandRepoImpl(session=self.session)
        self.event_query_repo = EventQueryRepoImpl(session=self.session)
        self.seat_command_repo = SeatCommandRepoImpl(session=self.session)
        self.seat_query_repo = SeatQueryRepoImpl(session=self.session)
        self.booking_command_repo = BookingCommandRepoImpl(session=self.session)
        self.booking_query_repo = BookingQueryRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args: Any) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self.session is not None:
                await self.session.close()
                self.session = None

    async def _commit(self) -> None:
        assert self.session is not None
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """
    In-process implementation of Unit of Work

    Holds the store lock for the whole block, so units of work are serialised.
    A snapshot taken on entry (and refreshed on commit) is restored on rollback.
    """

    def __init__(self, state: InMemoryState):
        self.state = state
        self._snapshot: Any = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.booking.driven_adapter.memory.booking_repo_memory import (
            BookingCommandRepoMemory,
            BookingQueryRepoMemory,
        )
        from src.service.booking.driven_adapter.memory.event_repo_memory import (
            EventCommandRepoMemory,
            EventQueryRepoMemory,
        )
        from src.service.booking.driven_adapter.memory.seat_repo_memory import (
            SeatCommandRepoMemory,
            SeatQueryRepoMemory,
        )

        await self.state.lock.acquire()
        self._snapshot = copy.deepcopy(self.state.data)

        self.event_command_repo = EventCommandRepoMemory(state=self.state)
        self.event_query_repo = EventQueryRepoMemory(state=self.state)
        self.seat_command_repo = SeatCommandRepoMemory(state=self.state)
        self.seat_query_repo = SeatQueryRepoMemory(state=self.state)
        self.booking_command_repo = BookingCommandRepoMemory(state=self.state)
        self.booking_query_repo = BookingQueryRepoMemory(state=self.state)

        return await super().__aenter__()

    async def __aexit__(self, *args: Any) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            self._snapshot = None
            self.state.lock.release()

    async def _commit(self) -> None:
        self._snapshot = copy.deepcopy(self.state.data)

    async def rollback(self) -> None:
        if self._snapshot is not None and self._snapshot != self.state.data:
            Logger.base.debug('↩️  [UoW] Restoring in-memory snapshot')
            self.state.data = copy.deepcopy(self._snapshot)
