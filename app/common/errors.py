"""
Global exception handlers

Data-access failures end the request with a generic 500; the original
message is only exposed while running in development.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


class DataAccessError(Exception):
    """Base error for failures while reading from the record store"""


def internal_error_response(exc: Exception) -> JSONResponse:
    content = {"error": INTERNAL_ERROR_MESSAGE}
    if settings.is_development:
        content["details"] = str(exc)
    return JSONResponse(status_code=500, content=content)


async def data_access_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Data access error on {request.method} {request.url.path}: {exc}")
    return internal_error_response(exc)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return internal_error_response(exc)


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(DataAccessError, data_access_error_handler)
    app.add_exception_handler(SQLAlchemyError, data_access_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
