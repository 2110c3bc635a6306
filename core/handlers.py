import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.errors import ErrorCode, ErrorMessage
from core.exceptions import AppException

logger = logging.getLogger(__name__)


def error_content(message: str, code: str | None = None, errors=None) -> dict:
    content = {"success": False, "error": message}
    if code:
        content["code"] = code
    if errors:
        content["errors"] = errors
    return content


async def app_exception_handler(request: Request, exc: AppException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_content(exc.message, exc.code, exc.details),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in err["loc"] if part not in ("query", "body", "path")),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_content(ErrorMessage.VALIDATION_FAILED, ErrorCode.VALIDATION_FAILED, errors),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_content(ErrorMessage.INTERNAL_ERROR, ErrorCode.INTERNAL_ERROR),
    )
