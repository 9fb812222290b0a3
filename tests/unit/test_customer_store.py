"""HttpCustomerRecordStore over a mocked IHttpClient."""

from unittest.mock import AsyncMock

import pytest

from bookflow.application.dtos.collaborators import HttpResponse
from bookflow.domain.exceptions import ActionExecutionException
from bookflow.infrastructure.external.customers import HttpCustomerRecordStore


@pytest.fixture
def http() -> AsyncMock:
    client = AsyncMock()
    client.request = AsyncMock(return_value=HttpResponse(status_code=200))
    return client


async def test_patches_customer(http: AsyncMock) -> None:
    store = HttpCustomerRecordStore(http, "https://booking.test/api/", token="secret", timeout=3.0)
    assert await store.update("cus/1", {"tag": "vip"}) is True
    http.request.assert_awaited_once_with(
        "https://booking.test/api/customers/cus%2F1",
        "PATCH",
        {"Content-Type": "application/json", "Authorization": "Bearer secret"},
        {"tag": "vip"},
        3.0,
    )


async def test_missing_customer_returns_false(http: AsyncMock) -> None:
    http.request.return_value = HttpResponse(status_code=404)
    store = HttpCustomerRecordStore(http, "https://booking.test")
    assert await store.update("cus_1", {"tag": "vip"}) is False


async def test_server_error_raises(http: AsyncMock) -> None:
    http.request.return_value = HttpResponse(status_code=503)
    store = HttpCustomerRecordStore(http, "https://booking.test")
    with pytest.raises(ActionExecutionException, match="HTTP 503"):
        await store.update("cus_1", {"tag": "vip"})


async def test_unconfigured_store_raises(http: AsyncMock) -> None:
    store = HttpCustomerRecordStore(http, None)
    with pytest.raises(ActionExecutionException, match="not configured"):
        await store.update("cus_1", {"tag": "vip"})
    http.request.assert_not_awaited()
