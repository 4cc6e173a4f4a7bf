"""
Call tracing for use cases, allocators and repositories

`@Logger.io` logs a decorated call's arguments and return value at DEBUG,
prefixed with one `│` per nesting level so a booking request reads as a tree
(coordinator, then allocators, then repositories).

A failure is logged once, at the innermost decorated frame. CustomBaseError
(SEAT_CONFLICT, DUPLICATE_BOOKING, ...) is an expected outcome and is logged
without a traceback; anything else gets one.
"""

from collections.abc import Awaitable, Generator
from functools import wraps
from inspect import iscoroutinefunction, isgeneratorfunction
import types
from typing import TYPE_CHECKING, Any, Callable, Optional, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.generator_wrapper import GeneratorWrapper
from src.platform.logging.loguru_io_config import (
    ExtraField,
    GeneratorMethod,
    call_depth_var,
    custom_logger,
)
from src.platform.logging.loguru_io_utils import (
    build_call_target_func_path,
    fetch_layer_depth,
    get_chain_start_time,
    handle_yield,
    mask_sensitive,
    normalize_args_kwargs,
    reset_call_depth,
    should_mask_keyword,
    truncate_content,
)

_F = TypeVar('_F', bound=Callable[..., Any])

# Frames between loguru and the decorated function's caller
_CALLER_DEPTH = 2


class LoguruIO:
    def __init__(
        self, custom_logger: 'LoguruLogger', *, reraise: bool = True, truncate_content: bool = False
    ) -> None:
        self._custom_logger = custom_logger
        self.reraise = reraise
        self.truncate_content = truncate_content
        self.call_target = ''

    def _bound(self, extra_depth: int = 0) -> 'LoguruLogger':
        # One decorator instance serves many concurrent coroutines, so extras are bound per call
        return self._custom_logger.bind(
            **{
                ExtraField.CALL_TARGET: self.call_target,
                ExtraField.CHAIN_START_TIME: get_chain_start_time(),
            }
        ).opt(depth=_CALLER_DEPTH + extra_depth)

    def log_args_kwargs_content(
        self, *args: Any, yield_method: Optional[GeneratorMethod] = None, **kwargs: Any
    ) -> None:
        call_depth_var.set(call_depth_var.get() + 1)
        if not settings.DEBUG:
            return
        self._bound().debug(
            f'{fetch_layer_depth()}{handle_yield(yield_method)}'
            f'args: {self.mask_sensitive(args)}, kwargs: {self.mask_sensitive(kwargs)}'
        )

    def log_return_content(
        self, return_value: Any, yield_method: Optional[GeneratorMethod] = None
    ) -> None:
        if not settings.DEBUG:
            return
        self._bound().debug(
            f'{fetch_layer_depth()}{handle_yield(yield_method)}'
            f'return: {self.mask_sensitive(return_value)}'
        )

    def log_exception(self, exc: Exception) -> None:
        if getattr(exc, '_has_logged', False):
            return
        exc._has_logged = True  # type: ignore[attr-defined]
        if isinstance(exc, CustomBaseError):
            self._bound(1).error(f'{type(exc).__name__}[{exc.code}]: {exc}')
        else:
            self._bound(1).exception(f'{type(exc).__name__}: {exc}')

    def mask_sensitive(self, data: Any) -> Any:
        if isinstance(data, dict):
            masked: Any = {
                key: self.mask_sensitive(should_mask_keyword(key, value))
                for key, value in data.items()
            }
        elif isinstance(data, list | tuple):
            masked = type(data)(self.mask_sensitive(item) for item in data)
        else:
            masked = mask_sensitive(data)
        return truncate_content(masked) if self.truncate_content else masked

    def _hide_from_traceback(self, func: Callable[..., Any]) -> Callable[..., Any]:
        func.__code__ = func.__code__.replace(  # type: ignore[attr-defined]
            co_filename=cast(types.FunctionType, self._custom_logger.catch).__code__.co_filename
        )
        return func

    def __call__(self, func: _F) -> _F:
        self.call_target = build_call_target_func_path(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    self.log_args_kwargs_content(*args, **kwargs)
                    args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                    result = await cast(Awaitable[Any], func(*args, **kwargs))
                    self.log_return_content(result)
                    return result
                except Exception as e:
                    self.log_exception(e)
                    if self.reraise:
                        raise
                    return None
                finally:
                    reset_call_depth()

            return cast(_F, self._hide_from_traceback(async_wrapper))

        if isgeneratorfunction(func):

            @wraps(func)
            def generator_wrapper(*args: Any, **kwargs: Any) -> GeneratorWrapper | None:
                # Each step is traced by GeneratorWrapper; only creation is traced here
                try:
                    self.log_args_kwargs_content(*args, **kwargs)
                    gen_obj = cast(Generator[Any, Any, Any], func(*args, **kwargs))
                    return GeneratorWrapper(gen_obj, self)
                except Exception as e:
                    self.log_exception(e)
                    if self.reraise:
                        raise
                    return None
                finally:
                    reset_call_depth()

            return cast(_F, self._hide_from_traceback(generator_wrapper))

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                self.log_args_kwargs_content(*args, **kwargs)
                args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                result = func(*args, **kwargs)
                self.log_return_content(result)
                return result
            except Exception as e:
                self.log_exception(e)
                if self.reraise:
                    raise
                return None
            finally:
                reset_call_depth()

        return cast(_F, self._hide_from_traceback(sync_wrapper))


_P = ParamSpec('_P')
_T = TypeVar('_T')


class Logger:
    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(func: None = ..., *, reraise: bool = ..., truncate_content: bool = ...) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None, *, reraise: bool = True, truncate_content: bool = True
    ) -> Callable[_P, _T] | LoguruIO:
        decorator = LoguruIO(
            custom_logger=custom_logger, reraise=reraise, truncate_content=truncate_content
        )
        return decorator(func) if func else decorator
