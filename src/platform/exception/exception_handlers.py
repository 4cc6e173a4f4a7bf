"""
HTTP rendering of the error taxonomy

Every error body has the same shape: {"detail": ..., "code": ..., **extra}.
`code` is the stable machine-readable value clients branch on.
"""

from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError, ValidationError
from src.platform.logging.loguru_io import Logger

ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]

INTERNAL_ERROR_CODE = 'INTERNAL_ERROR'


def _error_response(status_code: int, detail: Any, code: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'detail': detail, 'code': code, **extra})


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc))
    return _error_response(error.status_code, error.message, error.code, **error.extra)


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Bare ValueErrors come from entity construction and read as input errors
    return _error_response(status.HTTP_400_BAD_REQUEST, str(exc), ValidationError.code)


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    return _error_response(
        status.HTTP_400_BAD_REQUEST, jsonable_encoder(errors), ValidationError.code
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.error(f'Unhandled {type(exc).__name__} on {request.method} {request.url.path}')
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal server error', INTERNAL_ERROR_CODE
    )


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    ValueError: value_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: general_500_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
