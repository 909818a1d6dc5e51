"""
Custom exceptions for the mock interview service.

Every failure surfaces to the client as ``{"error": "..."}``. The exception
class decides the status code; which backend step failed (generation, parsing,
storage) is only visible in the server logs.
"""
import logging
from typing import Optional

from fastapi import Request
from starlette.exceptions import HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# ============================================================================
# Custom Exception Classes
# ============================================================================

class AppError(Exception):
    """Base exception for all application errors."""
    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class UnauthorizedError(AppError):
    """Raised when the caller identity cannot be resolved."""
    status_code = 401

    def __init__(self, message: str = "Unauthorized", details: Optional[dict] = None):
        super().__init__(message, details)


class InvalidInterviewRequestError(AppError):
    """Raised when the form fields or the resume file are not usable."""
    status_code = 400


class InterviewNotFoundError(AppError):
    """Raised when a stored interview does not exist for the caller."""
    status_code = 404


class GenerationError(AppError):
    """Raised when the language model call fails."""
    pass


class MalformedResponseError(AppError):
    """Raised when the model reply cannot be coerced into a question set."""
    pass


class PersistenceError(AppError):
    """Raised when a store insert or query fails."""
    pass


# ============================================================================
# FastAPI Exception Handlers
# ============================================================================

async def app_exception_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}", exc_info=exc)
        message = "Internal server error"
    else:
        logger.warning(f"{type(exc).__name__}: {exc.message}")
        message = exc.message
    return JSONResponse(status_code=exc.status_code, content={"error": message})


async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    logger.warning(f"HTTP exception: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()) if part != 'body')}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.warning(f"Request validation failed: {problems}")
    return JSONResponse(
        status_code=400,
        content={"error": f"Invalid request: {problems}"},
    )
