"""Outbound HTTP client for webhook actions (implements IHttpClient)."""

from __future__ import annotations

from typing import Any

import httpx

from bookflow.application.dtos.collaborators import HttpResponse
from bookflow.domain.exceptions import TransientCollaboratorException
from bookflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class HttpxClient:
    """IHttpClient backed by a shared httpx.AsyncClient (connection reuse).

    Timeouts and transport errors become TransientCollaboratorException.
    HTTP error statuses are returned, not raised; callers decide what a
    non-2xx means.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient()

    async def request(
        self,
        url: str,
        method: str,
        headers: dict[str, str],
        body: Any,
        timeout: float,
    ) -> HttpResponse:
        kwargs: dict[str, Any] = {}
        if isinstance(body, (dict, list)):
            kwargs["json"] = body
        elif body is not None:
            kwargs["content"] = str(body)
        try:
            resp = await self._client.request(
                method, url, headers=headers, timeout=timeout, **kwargs
            )
        except httpx.TimeoutException as e:
            raise TransientCollaboratorException(
                "http", f"timed out after {timeout:g}s calling {url}"
            ) from e
        except httpx.TransportError as e:
            raise TransientCollaboratorException(
                "http", f"{e.__class__.__name__} calling {url}"
            ) from e
        logger.debug("HTTP %s %s -> %d", method, url, resp.status_code)
        if not resp.content:
            return HttpResponse(status_code=resp.status_code)
        try:
            parsed: Any = resp.json()
        except ValueError:
            parsed = resp.text
        return HttpResponse(status_code=resp.status_code, body=parsed)

    async def aclose(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
