import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mensa.api.errors import ApiError, BadRequestError, InternalServerError, NotFoundError
from mensa.utilities.constants import MSG_MALFORMED_INPUT

logger = logging.getLogger(__name__)


def send_result(data: Any) -> dict:
    """Success envelope: {"success": true, "data": ...}."""
    return {"success": True, "data": data}


def send_error(error: ApiError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return send_error(exc)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return send_error(NotFoundError("route"))
    return send_error(ApiError(exc.status_code, str(exc.detail)))


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return send_error(BadRequestError(MSG_MALFORMED_INPUT))


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return send_error(InternalServerError())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
