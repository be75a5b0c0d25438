"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from shop_admin.adapters.admin_api_client import AdminApiClient, TransportConfig
from shop_admin.adapters.token_store import TokenStore
from shop_admin.config import Settings
from shop_admin.containers import AppContainer, build_services
from shop_admin.domain.dashboard import DashboardStats
from shop_admin.domain.identity import Identity, LoginResult
from shop_admin.domain.orders import OrderList
from shop_admin.domain.payments import PaymentList
from shop_admin.errors import AuthError, ServerError

ADMIN_EMAIL = "a@b.com"
ADMIN_PASSWORD = "x"


def user_payload(
    email: str = ADMIN_EMAIL, role: str = "ADMIN", user_id: str = "user-1"
) -> dict[str, object]:
    return {
        "id": user_id,
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": email,
        "role": role,
    }


def order_payload(
    order_id: str = "order-1",
    status: str = "PENDING",
    total: object = "42.50",
    customer_name: str = "Grace Hopper",
    customer_email: str = "grace@example.com",
) -> dict[str, object]:
    return {
        "id": order_id,
        "orderNumber": f"ORD-{order_id.upper()}",
        "total": total,
        "status": status,
        "createdAt": "2024-05-01T10:00:00Z",
        "customer": {"name": customer_name, "email": customer_email},
        "payment": {"status": "COMPLETED", "method": "card", "amount": total},
        "itemCount": 2,
        "shippingAddress": {
            "name": customer_name,
            "address": "1 Main St",
            "city": "Springfield",
            "state": "IL",
            "zipCode": "62701",
            "country": "US",
        },
    }


def payment_payload(
    payment_id: str = "pay-1",
    amount: object = "19.99",
    status: str = "COMPLETED",
    email: str = "grace@example.com",
) -> dict[str, object]:
    return {
        "id": payment_id,
        "amount": amount,
        "status": status,
        "paymentMethod": "card",
        "gatewayTransactionId": None,
        "gatewayProvider": "stripe",
        "gatewayPaymentId": f"gw-{payment_id}",
        "transactionId": None,
        "gatewayFee": "0.88",
        "netAmount": "19.11",
        "currency": "USD",
        "createdAt": "2024-05-01T10:00:00Z",
        "paidAt": "2024-05-01T10:01:00Z",
        "failedAt": None,
        "failureReason": None,
        "order": {
            "id": "order-1",
            "total": amount,
            "user": {"firstName": "Grace", "lastName": "Hopper", "email": email},
        },
    }


def dashboard_payload() -> dict[str, object]:
    return {
        "overview": {
            "totalUsers": 12,
            "totalOrders": 1500,
            "totalProducts": 40,
            "totalRevenue": "12345.6",
            "netRevenue": 12000,
            "gatewayFees": "345.60",
            "successfulPayments": 1400,
        },
        "recentOrders": [
            {
                "id": "order-1",
                "customerName": "Grace Hopper",
                "total": "42.50",
                "status": "PENDING",
                "paymentStatus": "COMPLETED",
                "paymentMethod": "card",
                "createdAt": "2024-05-01T10:00:00Z",
            }
        ],
        "dailyRevenue": [{"date": "2024-05-01", "revenue": "42.50"}],
    }


@dataclass
class FakeAdminApiClient(AdminApiClient):
    """In-memory admin backend that validates payloads like the real client."""

    accounts: dict[str, tuple[str, dict[str, object]]] = field(default_factory=dict)
    tokens: dict[str, dict[str, object]] = field(default_factory=dict)
    orders: list[dict[str, object]] = field(default_factory=list)
    payments: list[dict[str, object]] = field(default_factory=list)
    dashboard: dict[str, object] = field(default_factory=dashboard_payload)
    calls: list[str] = field(default_factory=list)
    transports: list[TransportConfig] = field(default_factory=list)
    failure: Exception | None = None

    def add_account(
        self, email: str, password: str, role: str = "ADMIN"
    ) -> dict[str, object]:
        user = user_payload(email=email, role=role)
        self.accounts[email] = (password, user)
        return user

    async def login(
        self, transport: TransportConfig, email: str, password: str
    ) -> LoginResult:
        self._record("login", transport)
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise AuthError(
                "Invalid credentials", backend_message="Invalid credentials"
            )
        token = f"t{len(self.tokens) + 1}"
        self.tokens[token] = account[1]
        return LoginResult.model_validate({"token": token, "user": account[1]})

    async def get_profile(self, transport: TransportConfig) -> Identity:
        self._record("profile", transport)
        return Identity.model_validate(self._authorize(transport))

    async def get_dashboard(self, transport: TransportConfig) -> DashboardStats:
        self._record("dashboard", transport)
        self._authorize(transport)
        return DashboardStats.model_validate(self.dashboard)

    async def list_orders(self, transport: TransportConfig) -> OrderList:
        self._record("orders", transport)
        self._authorize(transport)
        return OrderList.model_validate({"orders": self.orders})

    async def update_order_status(
        self, transport: TransportConfig, order_id: str, status: str
    ) -> dict[str, object]:
        self._record("update_status", transport)
        self._authorize(transport)
        for order in self.orders:
            if order["id"] == order_id:
                order["status"] = status
                return {"order": {"id": order_id, "status": status}}
        raise ServerError("Order not found", status_code=404)

    async def list_payments(self, transport: TransportConfig) -> PaymentList:
        self._record("payments", transport)
        self._authorize(transport)
        return PaymentList.model_validate({"payments": self.payments})

    def _record(self, call: str, transport: TransportConfig) -> None:
        self.calls.append(call)
        self.transports.append(transport)
        if self.failure is not None:
            raise self.failure

    def _authorize(self, transport: TransportConfig) -> dict[str, object]:
        user = self.tokens.get(transport.token or "")
        if user is None:
            raise AuthError("Invalid token", backend_message="Invalid token")
        return user


@dataclass
class InMemoryTokenStore(TokenStore):
    """Token store keeping the token in memory."""

    token: str | None = None
    writes: list[str | None] = field(default_factory=list)

    def get(self) -> str | None:
        return self.token

    def set(self, token: str) -> None:
        self.token = token
        self.writes.append(token)

    def clear(self) -> None:
        self.token = None
        self.writes.append(None)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        api_base_url="https://shop.test",
        token_store_path=tmp_path / "session.json",
        query_stale_seconds=60,
    )


@pytest.fixture
def api_client() -> FakeAdminApiClient:
    client = FakeAdminApiClient()
    client.add_account(ADMIN_EMAIL, ADMIN_PASSWORD)
    return client


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest.fixture
def container(
    settings: Settings,
    api_client: FakeAdminApiClient,
    token_store: InMemoryTokenStore,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return build_services(
        settings,
        api_client=api_client,
        token_store=token_store,
        close_resources=close_resources,
    )
