import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import CatalogError, InternalError, MethodError, NotFoundError
from app.models.error import APIError

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def error_response(exc: CatalogError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=APIError(error=exc.code, message=exc.message).model_dump(),
        headers=CORS_HEADERS,
    )


async def catalog_error_handler(request: Request, exc: Exception):
    assert isinstance(exc, CatalogError)

    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc)


async def http_error_handler(request: Request, exc: Exception):
    # Routing misses raised by Starlette itself
    assert isinstance(exc, StarletteHTTPException)

    if exc.status_code == 404:
        return error_response(NotFoundError())
    if exc.status_code == 405:
        return error_response(MethodError())
    return error_response(InternalError())
