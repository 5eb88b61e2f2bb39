"""Exception handlers that turn domain errors into the failure envelope.

    {"success": false, "error": "<message>", "details": {...}}

Protean's own FastAPI handlers are registered first; the handlers here replace
them for the errors this API reports, so every failure carries the envelope.
Validation and not-found errors are expected outcomes and are not logged as
errors; infrastructure failures are logged with their stack trace and reported
to the caller without internals.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import (
    ExpectedVersionError,
    InvalidOperationError,
    ObjectNotFoundError,
    ValidationError,
)
from protean.integrations.fastapi import register_exception_handlers as register_protean_handlers
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from foodie.api.schemas import field_errors
from foodie.utils.logging import get_logger

logger = get_logger(__name__)


def error_response(status_code: int, error: str, details=None) -> JSONResponse:
    content = {"success": False, "error": error}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _headline(messages) -> str:
    """A single field with a single message is the headline; anything else is generic."""
    if isinstance(messages, dict) and len(messages) == 1:
        (field_messages,) = messages.values()
        if isinstance(field_messages, list) and len(field_messages) == 1:
            return str(field_messages[0])
    return "Validation failed"


async def _request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(400, "Validation failed", field_errors(exc.errors()))


async def _validation_handler(request: Request, exc: ValidationError):
    return error_response(400, _headline(exc.messages), exc.messages)


async def _not_found_handler(request: Request, exc: ObjectNotFoundError):
    return error_response(404, str(exc))


async def _invalid_operation_handler(request: Request, exc: InvalidOperationError):
    return error_response(400, str(exc), exc.extra_info)


async def _conflict_handler(request: Request, exc: ExpectedVersionError):
    logger.warning("request_conflict", path=request.url.path, error=str(exc))
    return error_response(409, "Order was updated concurrently, please retry")


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


async def _infrastructure_handler(request: Request, exc: Exception):
    logger.error("request_failed", path=request.url.path, method=request.method, exc_info=exc)
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    register_protean_handlers(app)

    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(ValidationError, _validation_handler)
    app.add_exception_handler(ObjectNotFoundError, _not_found_handler)
    app.add_exception_handler(InvalidOperationError, _invalid_operation_handler)
    app.add_exception_handler(ExpectedVersionError, _conflict_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _infrastructure_handler)
    app.add_exception_handler(Exception, _infrastructure_handler)
