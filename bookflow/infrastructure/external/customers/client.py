"""Customer record store backed by the booking service's HTTP API."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from bookflow.application.interfaces.services import IHttpClient
from bookflow.domain.exceptions import ActionExecutionException
from bookflow.shared.enums import ActionType
from bookflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class HttpCustomerRecordStore:
    """ICustomerRecordStore that PATCHes {base_url}/customers/{id}."""

    def __init__(
        self,
        http_client: IHttpClient,
        base_url: str | None,
        *,
        token: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/") if base_url else None
        self._token = token
        self._timeout = timeout

    async def update(self, customer_id: str, patch: dict[str, Any]) -> bool:
        """Apply patch; False when the booking service answers 404."""
        if not self._base_url:
            raise ActionExecutionException(
                ActionType.UPDATE_CUSTOMER.value,
                "customer service is not configured (CUSTOMER_SERVICE_URL)",
            )
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        url = f"{self._base_url}/customers/{quote(customer_id, safe='')}"
        response = await self._http.request(url, "PATCH", headers, patch, self._timeout)
        if response.status_code == 404:
            return False
        if not response.ok:
            raise ActionExecutionException(
                ActionType.UPDATE_CUSTOMER.value,
                f"customer service returned HTTP {response.status_code}",
            )
        logger.info("Customer %s updated (fields=%s)", customer_id, sorted(patch))
        return True
