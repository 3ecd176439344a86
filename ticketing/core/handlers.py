# ticketing/core/handlers.py
"""Exception handlers rendering the error taxonomy as ``{"message": ...}`` bodies."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ticketing.core.errors import AppError, AuthError, StorageError, ValidationError
from ticketing.core.logging_config import get_logger
from ticketing.core.security import authenticate_request

logger = get_logger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthError):
        headers = {"WWW-Authenticate": "Bearer"}
    elif isinstance(exc, StorageError):
        logger.exception(
            "storage failure",
            exc_info=exc,
            extra={"path": request.url.path, "method": request.method},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    # FastAPI decodes the JSON body before dependencies run, so the
    # bearer check has not happened yet for these
    if any(error.get("type") == "json_invalid" for error in errors):
        try:
            await authenticate_request(request)
        except AuthError as auth_exc:
            return await app_error_handler(request, auth_exc)
    return await app_error_handler(request, ValidationError.from_errors(errors))


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


__all__ = ["app_error_handler", "request_validation_handler", "install_exception_handlers"]
