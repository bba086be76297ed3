import logging

from fastapi import Request
from fastapi.responses import Response

from app.api.errors import CORS_HEADERS, error_response
from app.core.exceptions import InternalError

logger = logging.getLogger(__name__)


async def cors_middleware(request: Request, call_next) -> Response:
    """
    Answer preflight requests before routing and stamp the permissive
    cross-origin headers on every other response, errors included.
    """
    if request.method == "OPTIONS":
        return Response(status_code=200, headers={**CORS_HEADERS, "Content-Type": "application/json"})

    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(InternalError())

    response.headers.update(CORS_HEADERS)
    response.headers["Content-Type"] = "application/json"
    return response
