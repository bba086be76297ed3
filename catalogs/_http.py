import logging
from typing import Any, Dict

import httpx

from app.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


async def get_json(
        client: httpx.AsyncClient,
        url: str,
        params: Dict[str, Any],
        catalog: str,
) -> Dict[str, Any]:
    """
    Issue one GET and return the decoded JSON object.
    Every failure mode is reported as UpstreamError; nothing is retried.
    """
    try:
        resp = await client.get(url, params=params)
    except httpx.HTTPError as e:
        raise UpstreamError(
            f"{catalog} API unreachable: {type(e).__name__}",
            details={"catalog": catalog},
        ) from e

    if not resp.is_success:
        raise UpstreamError(
            f"{catalog} API error: {resp.status_code}",
            upstream_status=resp.status_code,
            details={"catalog": catalog},
        )

    try:
        data = resp.json()
    except ValueError as e:
        raise UpstreamError(
            f"{catalog} API returned invalid JSON",
            upstream_status=resp.status_code,
            details={"catalog": catalog},
        ) from e

    if not isinstance(data, dict):
        raise UpstreamError(
            f"{catalog} API returned an unexpected payload",
            upstream_status=resp.status_code,
            details={"catalog": catalog},
        )

    logger.debug("%s GET %s -> %s", catalog, resp.request.url.path, resp.status_code)
    return data
