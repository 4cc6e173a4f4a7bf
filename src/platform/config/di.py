"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork
from src.platform.metrics.booking_metrics import metrics
from src.service.booking.driven_adapter.memory.in_memory_state import InMemoryState
from src.service.booking.driven_adapter.notification.logging_booking_notifier_impl import (
    LoggingBookingNotifierImpl,
)
from src.service.booking.driven_adapter.notification.webhook_booking_notifier_impl import (
    WebhookBookingNotifierImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager with settings from config_service)
    database = providers.Singleton(Database)

    # In-process store (STORAGE_BACKEND=memory)
    in_memory_state = providers.Singleton(InMemoryState)

    # Unit of Work: a fresh one per use, backend chosen by settings
    unit_of_work = providers.Selector(
        config_service.provided.STORAGE_BACKEND,
        sqlalchemy=providers.Factory(
            SqlAlchemyUnitOfWork, session_factory=database.provided.session_maker
        ),
        memory=providers.Factory(InMemoryUnitOfWork, state=in_memory_state),
    )

    # Notifications (best effort, after commit)
    booking_notifier = providers.Selector(
        config_service.provided.NOTIFICATION_BACKEND,
        log=providers.Singleton(
            LoggingBookingNotifierImpl,
            sender=config_service.provided.NOTIFICATION_SENDER,
            history_size=config_service.provided.NOTIFICATION_LOG_HISTORY_SIZE,
        ),
        webhook=providers.Singleton(
            WebhookBookingNotifierImpl,
            url=config_service.provided.NOTIFICATION_WEBHOOK_URL,
            timeout=config_service.provided.NOTIFICATION_TIMEOUT_SECONDS,
        ),
    )

    # Metrics
    booking_metrics = providers.Object(metrics)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
