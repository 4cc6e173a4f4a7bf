"""
Loguru sinks and shared state for Logger.io

Configured once, at import:
- a stdout sink, plus an hourly rotated file sink when DEBUG is on
- stdlib logging (uvicorn, SQLAlchemy, httpx) routed into loguru
- every record tagged with the current OpenTelemetry trace id, so lines can be
  matched with the reservation.* spans of the same request
"""

from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import logging
import os
import sys
from typing import TYPE_CHECKING

from loguru import logger as loguru_logger
from opentelemetry import trace


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger, Record

from src.platform.config.core_setting import settings
from src.platform.constant.path import LOG_DIR as DEFAULT_LOG_DIR
from src.platform.logging.service_context import get_service_context


LOG_DIR = os.environ.get('TEST_LOG_DIR', str(DEFAULT_LOG_DIR))

SENSITIVE_KEYWORDS = {
    'password',
    'user_email',
    'email',
}
DEPTH_LINE = '│'
NO_TRACE = '-'

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    TRACE_ID = 'trace_id'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


class GeneratorMethod(StrEnum):
    NEXT = 'next'
    SEND = 'send'
    THROW = 'throw'


# Only noise at DEBUG level
_QUIET_LOGGER_PREFIXES = ('aiosqlite', 'asyncio', 'httpcore', 'sqlalchemy.pool')

_HTTP_STATUS_LEVELS = ((500, 'CRITICAL'), (400, 'ERROR'), (300, 'WARNING'), (200, 'SUCCESS'))


def _attach_trace_id(record: 'Record') -> None:
    span_context = trace.get_current_span().get_span_context()
    record['extra'][ExtraField.TRACE_ID] = (
        trace.format_trace_id(span_context.trace_id) if span_context.is_valid else NO_TRACE
    )


def _bind_defaults() -> 'LoguruLogger':
    return loguru_logger.bind(
        **{
            ExtraField.SERVICE_CONTEXT: get_service_context(),
            ExtraField.CHAIN_START_TIME: '',
            ExtraField.CALL_TARGET: '',
        }
    ).patch(_attach_trace_id)


def _parse_http_status_level(message: str) -> str | None:
    """
    Level for a uvicorn access line, chosen by its status code.

    Format: '127.0.0.1:52044 - "POST /api/booking HTTP/1.1" 201'
    """
    if ' - "' not in message or ' HTTP/' not in message:
        return None

    parts = message.split('"')
    if len(parts) < 3:
        return None

    status_parts = parts[2].strip().split()
    if not status_parts:
        return None

    try:
        status_code = int(status_parts[0])
    except ValueError:
        return None

    for floor, level in _HTTP_STATUS_LEVELS:
        if status_code >= floor:
            return level
    return 'INFO'


class InterceptHandler(logging.Handler):
    """Routes stdlib logging records into loguru with the same extras as Logger.base"""

    def __init__(self) -> None:
        super().__init__()
        self._bound = _bind_defaults()

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno <= logging.DEBUG and record.name.startswith(_QUIET_LOGGER_PREFIXES):
            return

        message = record.getMessage()

        level: str | int | None = _parse_http_status_level(message)
        if level is None:
            try:
                level = loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

        # Point loguru at the frame that called logging, not at logging itself
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        self._bound.opt(depth=depth, exception=record.exc_info).log(level, message)


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        f'<lk>{{extra[{ExtraField.TRACE_ID}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def _configure_sinks() -> 'LoguruLogger':
    loguru_logger.remove()
    min_level = 'DEBUG' if settings.DEBUG else 'INFO'

    loguru_logger.add(sys.stdout, format=io_log_format, level=min_level, enqueue=True)

    # Production ships stdout to the log collector; files are for local debugging
    if settings.DEBUG:
        hour = datetime.now(timezone.utc).strftime('%Y-%m-%d_%H')
        prefix = 'test_' if os.environ.get('TEST_LOG_DIR') else ''
        loguru_logger.add(
            f'{LOG_DIR}/{prefix}{hour}.log',
            format=io_log_format,
            rotation='1 hour',
            retention='7 days',
            compression='gz',
            enqueue=True,
            level=min_level,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    return _bind_defaults()


custom_logger = _configure_sinks()
