import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class CapacityCompassError(Exception):
    """Base exception for Capacity Compass"""

    def __init__(self, message: str, error_code: str | None = None):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class RequestShapeError(CapacityCompassError):
    """Request payload does not have the expected shape"""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message, "INVALID_REQUEST")


class ResourceNotFoundError(CapacityCompassError):
    """Resource not found exception"""

    def __init__(self, resource_type: str, resource_id: str | None = None):
        message = f"{resource_type} not found"
        if resource_id:
            message += f": {resource_id}"
        super().__init__(message, "RESOURCE_NOT_FOUND")


class ForecastError(CapacityCompassError):
    """Forecast generation failed unexpectedly"""

    def __init__(self, message: str):
        super().__init__(f"Failed to generate forecast: {message}", "FORECAST_ERROR")


def _error_list(errors) -> list[dict]:
    return [
        {
            "field": " -> ".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in errors
    ]


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "error_code": getattr(exc, "error_code", None) or "HTTP_ERROR",
            "path": str(request.url),
        },
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors"""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Request validation failed",
            "error_code": "VALIDATION_ERROR",
            "errors": _error_list(exc.errors()),
            "path": str(request.url),
        },
    )


async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors raised while parsing payload items"""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Data validation failed",
            "error_code": "VALIDATION_ERROR",
            "errors": _error_list(exc.errors()),
            "path": str(request.url),
        },
    )


async def capacity_compass_exception_handler(request: Request, exc: CapacityCompassError):
    """Handle custom Capacity Compass exceptions"""
    status_code = status.HTTP_400_BAD_REQUEST

    if isinstance(exc, ResourceNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ForecastError):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        logger.error(exc.message)

    return JSONResponse(
        status_code=status_code,
        content={
            "detail": exc.message,
            "error_code": exc.error_code,
            "path": str(request.url),
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error_code": "INTERNAL_ERROR",
            "path": str(request.url),
        },
    )
