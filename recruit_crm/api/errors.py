"""Map store exceptions to JSON error responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from recruit_crm.errors import ConflictError, InternalError, NotFoundError, ValidationError, format_errors

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Malformed body or query parameters fail the whole request with 400."""
        message = "Invalid query parameters" if request.method == "GET" else "Invalid request data"
        logger.warning(f"{request.method} {request.url.path} rejected: {message}")
        return JSONResponse(status_code=400, content={"message": message, "errors": format_errors(exc.errors())})

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
        return JSONResponse(status_code=400, content={"message": exc.message, "errors": exc.errors})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        return JSONResponse(status_code=409, content={"message": exc.message})

    @app.exception_handler(InternalError)
    @app.exception_handler(SQLAlchemyError)
    async def internal_error_handler(request: Request, exc: Exception):
        """Failed commits arrive as InternalError, failed reads as the raw SQLAlchemyError."""
        logger.error(f"{request.method} {request.url.path} failed", exc_info=exc)
        return JSONResponse(status_code=500, content={"message": InternalError.message})

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        """Return 429 with a clear message when rate limit is exceeded."""
        return JSONResponse(status_code=429, content={"message": f"Rate limit exceeded: {exc.detail}"})
