"""
Standardized response utilities
"""

import logging
from typing import Any, Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import RSVPError
from app.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

def success_response(status_code: int = 200, **content: Any) -> JSONResponse:
    """Create success response carrying the given top-level fields"""
    return JSONResponse(
        content={"success": True, **content},
        status_code=status_code
    )

def error_response(
    message: str,
    error_code: Optional[str] = None,
    details: Any = None,
    status_code: int = 400
) -> JSONResponse:
    """Create standardized error response"""
    response = ErrorResponse(
        error=message,
        error_code=error_code,
        details=details
    )
    return JSONResponse(
        content=response.model_dump(by_alias=True, exclude_none=True),
        status_code=status_code
    )

def internal_error(message: str) -> JSONResponse:
    """Generic 500 with a user-facing message"""
    return error_response(
        message=message,
        error_code="INTERNAL_ERROR",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )

def register_error_handlers(app: FastAPI) -> None:
    """Map domain and validation errors to error responses"""

    @app.exception_handler(RSVPError)
    async def rsvp_error_handler(request: Request, exc: RSVPError):
        logger.warning(f"{exc.code} on {request.url.path}: {exc.message}")
        return error_response(
            message=exc.message,
            error_code=exc.code,
            status_code=exc.http_status
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        return error_response(
            message="Dati non validi",
            error_code="BAD_INPUT",
            details=[
                {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg")}
                for err in exc.errors()
            ],
            status_code=status.HTTP_400_BAD_REQUEST
        )
