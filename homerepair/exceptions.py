"""
Error taxonomy shared by every handler.

Each error carries the HTTP status it maps to and a message that is safe to
return to the client. ``register_exception_handlers`` wires them into FastAPI
so that every failure is rendered as ``{"error": "<message>"}``.
"""

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from homerepair.utils.logger import logger

GENERIC_ERROR_MESSAGE = "Internal server error"


class HomeRepairError(Exception):
    """Base exception for all application errors."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE):
        super().__init__(message)
        self.message = message


class ValidationError(HomeRepairError):
    """Missing or malformed input."""

    status_code = HTTPStatus.BAD_REQUEST


class AuthError(HomeRepairError):
    """Missing or invalid bearer token."""

    status_code = HTTPStatus.UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class PermissionDeniedError(HomeRepairError):
    """Caller lacks the required role or ownership."""

    status_code = HTTPStatus.FORBIDDEN

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class NotFoundError(HomeRepairError):
    status_code = HTTPStatus.NOT_FOUND


class StateError(HomeRepairError):
    """Operation is invalid for the entity's current state."""

    status_code = HTTPStatus.BAD_REQUEST


class DocumentStoreError(HomeRepairError):
    """A document store read or write failed."""


class ExternalServiceError(HomeRepairError):
    """A call to a third-party service (search, vision, blob, LLM) failed."""

    def __init__(
        self,
        message: str,
        service: str,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.service = service
        self.original_error = original_error


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_home_repair_error(
    request: Request, exc: HomeRepairError
) -> JSONResponse:
    if exc.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
        # Server-side detail stays in the logs
        logger.error(
            "Request failed",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(exc.status_code, GENERIC_ERROR_MESSAGE)

    logger.info(
        "Request rejected",
        path=request.url.path,
        status_code=int(exc.status_code),
        error=exc.message,
    )
    return _error_response(exc.status_code, exc.message)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if field:
        message = f"{field}: {message}"
    return _error_response(HTTPStatus.BAD_REQUEST, message)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error", path=request.url.path, error_type=type(exc).__name__
    )
    return _error_response(HTTPStatus.INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HomeRepairError, handle_home_repair_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
