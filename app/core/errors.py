"""
Error taxonomy for the API.

Every failure a route can surface is one of these. They subclass
HTTPException so FastAPI renders them as {"detail": ...} with the right
status code, whether raised from a route, a dependency or a service.
"""
import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import is_production

logger = logging.getLogger(__name__)


class ValidationError(HTTPException):
    """Missing or malformed input."""

    def __init__(self, detail: str = "Invalid request."):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NoTenant(ValidationError):
    """Recruiter account has no company configured."""

    def __init__(self, detail: str = "Recruiter company not found."):
        super().__init__(detail=detail)


class Unauthenticated(HTTPException):
    def __init__(self, detail: str = "Authorization failed."):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    def __init__(self, detail: str = "You do not have access to this resource."):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found."):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class Conflict(HTTPException):
    def __init__(self, detail: str = "User already exists."):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class Unexpected(HTTPException):
    def __init__(self, detail: str = "Internal server error."):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort handler for anything that escaped a route.

    The exception text is only exposed outside production.
    """
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    detail = "Internal server error." if is_production() else str(exc) or exc.__class__.__name__
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": detail},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and parameters are a 400 with a readable message."""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())[1:])
        message = error.get("msg", "Invalid value").replace("Value error, ", "")
        messages.append(f"{field}: {message}" if field else message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "; ".join(messages) or "Invalid request."},
    )
