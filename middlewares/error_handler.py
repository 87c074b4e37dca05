import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemas.common import ErrorDetail, ErrorResponse
from services.grading import GradingError

logger = logging.getLogger(__name__)


def _error_body(code: str, message: str) -> dict:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return {"success": False, **body.model_dump(mode="json", exclude_none=True)}


def add_error_handlers(app: FastAPI):
    @app.exception_handler(GradingError)
    async def grading_error_handler(request: Request, exc: GradingError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=422, content=_error_body(exc.code, str(exc)))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=_error_body("INTERNAL_ERROR", str(exc)))
