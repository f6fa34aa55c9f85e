from enum import Enum

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette import status

from corsguard.utils.logging import logger

class RejectReason(str, Enum):
    MISSING_ORIGIN = "missing_origin"
    ORIGIN_NOT_ALLOWED = "origin_not_allowed"

# Origin rejections. Both surface as 403; the reason is for diagnostics only.
class OriginRejected(HTTPException):
    reason: RejectReason
    message: str = "Forbidden origin"

    def __init__(self, origin: str | None = None):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=self.message)
        self.origin = origin

    def __str__(self) -> str:
        return self.message

class MissingOrigin(OriginRejected):
    """The HTTP request header `Origin` is required but was not provided."""
    reason = RejectReason.MISSING_ORIGIN
    message = "The HTTP request header `Origin` is required but was not provided"

class OriginNotAllowed(OriginRejected):
    """`Origin` is not allowed to make this request."""
    reason = RejectReason.ORIGIN_NOT_ALLOWED
    message = "`Origin` is not allowed to make this request"

# ---- Exception handlers (register these in main.py) ----
async def handle_http_exception(request: Request, exc: HTTPException):
    logger.warning(f"HTTPException {exc.status_code}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": exc.detail},
    )

async def handle_validation_error(request: Request, exc: RequestValidationError | ValidationError):
    logger.warning("ValidationError")
    return JSONResponse(
        status_code=422,
        content={"ok": False, "error": "validation_error", "details": exc.errors()},
    )

async def handle_unhandled(request: Request, exc: Exception):
    logger.error(f"Unhandled error: {type(exc).__name__}", exc_info=True)
    return JSONResponse(status_code=500, content={"ok": False, "error": "internal_error"})
