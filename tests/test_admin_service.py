"""Tests for the admin service."""

import asyncio

import pytest

from shop_admin.containers import AppContainer
from shop_admin.domain.queries import QueryStatus
from shop_admin.errors import AdminClientError, AuthError, ServerError
from tests.conftest import (
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    FakeAdminApiClient,
    order_payload,
    payment_payload,
)


def _login(container: AppContainer) -> None:
    asyncio.run(container.admin_service.login(ADMIN_EMAIL, ADMIN_PASSWORD))


def test_orders_query_uses_session_token(
    container: AppContainer, api_client: FakeAdminApiClient
) -> None:
    api_client.orders = [order_payload()]
    _login(container)

    entry = asyncio.run(container.admin_service.orders())

    assert entry.status is QueryStatus.SUCCESS
    assert entry.data.orders[0].id == "order-1"
    assert api_client.transports[-1].token == "t1"


def test_status_update_refetches_orders(
    container: AppContainer, api_client: FakeAdminApiClient
) -> None:
    api_client.orders = [order_payload(status="PENDING")]
    _login(container)
    service = container.admin_service
    successes: list[object] = []

    asyncio.run(service.orders())
    asyncio.run(service.orders())
    assert api_client.calls.count("orders") == 1

    asyncio.run(
        service.update_order_status("order-1", "SHIPPED", on_success=successes.append)
    )
    entry = asyncio.run(service.orders())

    assert api_client.calls.count("orders") == 2
    assert entry.data.orders[0].status == "SHIPPED"
    assert len(successes) == 1


def test_failed_status_update_leaves_cache_untouched(
    container: AppContainer, api_client: FakeAdminApiClient
) -> None:
    api_client.orders = [order_payload()]
    _login(container)
    service = container.admin_service
    errors: list[AdminClientError] = []

    before = asyncio.run(service.orders())
    asyncio.run(
        service.update_order_status("missing", "SHIPPED", on_error=errors.append)
    )
    after = asyncio.run(service.orders())

    assert isinstance(errors[0], ServerError)
    assert after is before
    assert api_client.calls.count("orders") == 1


def test_unknown_status_is_rejected_before_request(
    container: AppContainer, api_client: FakeAdminApiClient
) -> None:
    _login(container)

    with pytest.raises(ValueError):
        asyncio.run(container.admin_service.update_order_status("order-1", "LOST"))

    assert "update_status" not in api_client.calls


def test_query_error_is_captured_in_entry(
    container: AppContainer, api_client: FakeAdminApiClient
) -> None:
    entry = asyncio.run(container.admin_service.payments())

    assert entry.status is QueryStatus.ERROR
    assert entry.error is not None
    assert entry.error.message == "Invalid token"


def test_logout_drops_cached_queries(
    container: AppContainer, api_client: FakeAdminApiClient
) -> None:
    api_client.payments = [payment_payload()]
    _login(container)
    asyncio.run(container.admin_service.payments())

    container.admin_service.logout()

    assert container.query_client.get("payments").data is None
    assert not container.session_store.is_authenticated


def test_failed_login_drops_cached_queries(
    container: AppContainer, api_client: FakeAdminApiClient
) -> None:
    api_client.payments = [payment_payload()]
    _login(container)
    asyncio.run(container.admin_service.payments())

    with pytest.raises(AuthError):
        asyncio.run(container.admin_service.login(ADMIN_EMAIL, "wrong"))

    assert container.query_client.get("payments").data is None
    assert not container.session_store.is_authenticated
