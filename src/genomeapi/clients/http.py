"""Shared request helper for the throwing service clients."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..errors import RequestError

logger = logging.getLogger(__name__)


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    params: dict[str, Any] | None,
    error_message: str,
) -> Any:
    """GET ``url`` and decode its JSON body.

    Raises:
        RequestError: On transport failure, a non-success status (the reason
            phrase is appended to ``error_message``) or a non-JSON body.
    """
    try:
        resp = await client.get(url, params=params)
    except httpx.HTTPError as e:
        raise RequestError(f"{error_message}: {e}", url=url) from e

    if not resp.is_success:
        logger.warning("%s returned HTTP %d", url, resp.status_code)
        raise RequestError(
            f"{error_message}: {resp.reason_phrase}",
            status_code=resp.status_code,
            url=str(resp.request.url),
        )

    try:
        return resp.json()
    except ValueError as e:
        raise RequestError(f"{error_message}: invalid JSON response", url=url) from e
