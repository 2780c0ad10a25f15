from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from estatehub.core.logging import get_logger

logger = get_logger(__name__)


class EstateHubException(Exception):
    """Base exception for EstateHub application."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_error_code: str = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(EstateHubException):
    """Malformed or out-of-range input: bad amounts, missing fields, unknown enum values."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_error_code = "VALIDATION_ERROR"


class NotFoundError(EstateHubException):
    """Identifier not present in the relevant table."""
    status_code = status.HTTP_404_NOT_FOUND
    default_error_code = "RESOURCE_NOT_FOUND"


class ConfigurationError(EstateHubException):
    """Exception for configuration-related errors."""
    default_error_code = "CONFIGURATION_ERROR"


def error_response(status_code: int, message: str) -> JSONResponse:
    """Create the structured `{"error": message}` body used by every error path."""
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_request_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = first.get("loc", ())
    if location and location[0] == "path":
        return f"Invalid {location[-1]}"
    field = ".".join(str(part) for part in location[1:]) or "body"
    return f"Invalid request: {field}: {first.get('msg', 'invalid value')}"


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain and request errors onto JSON client errors."""

    @app.exception_handler(EstateHubException)
    async def estatehub_exception_handler(request: Request, exc: EstateHubException):
        if exc.status_code >= 500:
            logger.error("Request failed", path=request.url.path, error_code=exc.error_code, error=exc.message)
        else:
            logger.info("Request rejected", path=request.url.path, error_code=exc.error_code, error=exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = _describe_request_error(exc)
        logger.info("Malformed request", path=request.url.path, error=message)
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception", path=request.url.path, error=str(exc), exc_info=exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
