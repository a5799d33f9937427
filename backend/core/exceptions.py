"""
Shared API errors and the handlers that render them.

Services raise these for conditions the caller can act on (missing
records, duplicate SKUs). Error bodies always carry `detail`,
`error_code` and the request `path`.
"""

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


def error_body(request: Request, detail: Any, error_code: Optional[str]) -> Dict[str, Any]:
    return {
        "detail": detail,
        "error_code": error_code,
        "path": str(request.url.path),
    }


class APIError(HTTPException):
    """HTTP error carrying a machine-readable code"""

    status_code_default = status.HTTP_400_BAD_REQUEST
    error_code_default = "API_ERROR"

    def __init__(
        self,
        detail: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(
            status_code=status_code or self.status_code_default, detail=detail
        )
        self.error_code = error_code or self.error_code_default


class NotFoundError(APIError):
    """Referenced record does not exist"""

    status_code_default = status.HTTP_404_NOT_FOUND
    error_code_default = "NOT_FOUND"


class ConflictError(APIError):
    """Write clashes with an existing record"""

    status_code_default = status.HTTP_409_CONFLICT
    error_code_default = "CONFLICT"


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    """Render a ValueError raised outside request validation as a 400"""
    logger.warning(f"ValueError at {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(request, str(exc), "VALIDATION_ERROR"),
    )


async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    logger.info(f"{exc.error_code} at {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, exc.detail, exc.error_code),
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app"""
    app.add_exception_handler(ValueError, handle_value_error)
    app.add_exception_handler(APIError, handle_api_error)
