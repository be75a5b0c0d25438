"""Admin REST API client."""

from dataclasses import dataclass
from typing import Protocol, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from shop_admin.domain.dashboard import DashboardStats
from shop_admin.domain.identity import Identity, LoginResult, ProfileResult
from shop_admin.domain.orders import OrderList
from shop_admin.domain.payments import PaymentList
from shop_admin.errors import (
    SCHEMA_MISMATCH,
    AuthError,
    NetworkError,
    ServerError,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

_AUTH_STATUS_CODES = {401, 403}


@dataclass(frozen=True)
class TransportConfig:
    """Per-request transport settings, including the bearer token."""

    base_url: str
    token: str | None = None
    timeout: float = 10.0

    def with_token(self, token: str | None) -> "TransportConfig":
        """Return a copy carrying a different bearer token."""
        return TransportConfig(
            base_url=self.base_url, token=token, timeout=self.timeout
        )

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"

    def headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


class AdminApiClient(Protocol):
    """Interface for the e-commerce admin backend."""

    async def login(
        self, transport: TransportConfig, email: str, password: str
    ) -> LoginResult:
        """Exchange credentials for a token and user."""

    async def get_profile(self, transport: TransportConfig) -> Identity:
        """Return the identity the bearer token belongs to."""

    async def get_dashboard(self, transport: TransportConfig) -> DashboardStats:
        """Return aggregate dashboard statistics."""

    async def list_orders(self, transport: TransportConfig) -> OrderList:
        """Return orders with customer, payment and shipping data."""

    async def update_order_status(
        self, transport: TransportConfig, order_id: str, status: str
    ) -> dict[str, object]:
        """Change the status of one order."""

    async def list_payments(self, transport: TransportConfig) -> PaymentList:
        """Return payment transactions."""


@dataclass
class HttpxAdminApiClient(AdminApiClient):
    """Admin API client implemented with httpx."""

    http_client: httpx.AsyncClient

    @classmethod
    def create(cls) -> "HttpxAdminApiClient":
        """Create an admin API client with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient())

    async def login(
        self, transport: TransportConfig, email: str, password: str
    ) -> LoginResult:
        """Exchange credentials using the login endpoint."""
        payload = await self._request(
            transport,
            "POST",
            "/api/auth/login",
            json={"email": email, "password": password},
        )
        return _parse(LoginResult, payload)

    async def get_profile(self, transport: TransportConfig) -> Identity:
        """Verify the bearer token against the profile endpoint."""
        payload = await self._request(transport, "GET", "/api/admin/profile")
        return _parse(ProfileResult, payload).user

    async def get_dashboard(self, transport: TransportConfig) -> DashboardStats:
        """Fetch dashboard statistics."""
        payload = await self._request(transport, "GET", "/api/admin/dashboard")
        return _parse(DashboardStats, payload)

    async def list_orders(self, transport: TransportConfig) -> OrderList:
        """Fetch the order listing."""
        payload = await self._request(transport, "GET", "/api/admin/orders")
        return _parse(OrderList, payload)

    async def update_order_status(
        self, transport: TransportConfig, order_id: str, status: str
    ) -> dict[str, object]:
        """Patch the status field of an order."""
        payload = await self._request(
            transport,
            "PATCH",
            f"/api/admin/orders/{order_id}/status",
            json={"status": status},
        )
        if not isinstance(payload, dict):
            raise ServerError(SCHEMA_MISMATCH)
        return payload

    async def list_payments(self, transport: TransportConfig) -> PaymentList:
        """Fetch payment transactions."""
        payload = await self._request(transport, "GET", "/api/admin/payments")
        return _parse(PaymentList, payload)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self,
        transport: TransportConfig,
        method: str,
        path: str,
        json: dict[str, object] | None = None,
    ) -> object:
        try:
            response = await self.http_client.request(
                method,
                transport.url(path),
                json=json,
                headers=transport.headers(),
                timeout=transport.timeout,
            )
        except httpx.RequestError as exc:
            raise NetworkError(str(exc) or type(exc).__name__) from exc

        if response.is_error:
            backend_message = _error_message(response)
            message = (
                backend_message or f"Request failed with status {response.status_code}"
            )
            if response.status_code in _AUTH_STATUS_CODES:
                raise AuthError(message, backend_message=backend_message)
            raise ServerError(
                message,
                status_code=response.status_code,
                backend_message=backend_message,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ServerError(
                SCHEMA_MISMATCH, status_code=response.status_code
            ) from exc


def _parse(model: type[ModelT], payload: object) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ServerError(SCHEMA_MISMATCH) from exc


def _error_message(response: httpx.Response) -> str | None:
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        for field in ("error", "message"):
            value = payload.get(field)
            if isinstance(value, str) and value:
                return value
    return None
