from loguru import logger
from opentelemetry.trace import NonRecordingSpan, SpanContext, use_span
import pytest

from src.platform.exception.exceptions import SeatConflictError
from src.platform.logging.loguru_io import Logger
from src.platform.logging.loguru_io_config import call_depth_var


@pytest.fixture
def error_records():
    records: list = []
    sink_id = logger.add(records.append, level='ERROR', format='{message}')
    yield records
    logger.remove(sink_id)


@Logger.io
async def _reserve(seat_ids: list[int]) -> None:
    raise SeatConflictError(seat_ids)


@Logger.io
async def _book(seat_ids: list[int]) -> None:
    await _reserve(seat_ids)


@Logger.io(reraise=False)
def _parse(value: str) -> int:
    return int(value)


@Logger.io
def _rows(count: int):
    for index in range(count):
        yield chr(ord('A') + index)


class TestLoguruIO:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_business_error_is_logged_once_and_reraised(self, error_records) -> None:
        """
        Given: a SeatConflictError raised two decorated layers deep
        When: it propagates to the caller
        Then: one error line carrying the code is logged, and the exception still reaches the caller
        """
        with pytest.raises(SeatConflictError):
            await _book([3])

        messages = [record.record['message'] for record in error_records]
        assert len(messages) == 1
        assert 'SeatConflictError[SEAT_CONFLICT]' in messages[0]
        assert error_records[0].record['exception'] is None

    @pytest.mark.unit
    def test_reraise_false_returns_none(self, error_records) -> None:
        assert _parse('7') == 7
        assert _parse('seven') is None
        assert len(error_records) == 1
        assert error_records[0].record['exception'] is not None

    @pytest.mark.unit
    def test_generator_is_forwarded(self) -> None:
        assert list(_rows(3)) == ['A', 'B', 'C']

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_call_depth_resets_after_calls(self) -> None:
        with pytest.raises(SeatConflictError):
            await _book([1])
        _parse('1')

        assert call_depth_var.get() == 0


class TestTraceIdTagging:
    @pytest.mark.unit
    def test_records_carry_the_active_trace_id(self, error_records) -> None:
        span_context = SpanContext(
            trace_id=0x0AF7651916CD43DD8448EB211C80319C, span_id=0xB7AD6B7169203331, is_remote=False
        )

        with use_span(NonRecordingSpan(span_context)):
            Logger.base.error('inside span')
        Logger.base.error('outside span')

        inside, outside = (record.record['extra']['trace_id'] for record in error_records)
        assert inside == '0af7651916cd43dd8448eb211c80319c'
        assert outside == '-'
