"""Admin service binding backend reads and writes to the console."""

from dataclasses import dataclass

from shop_admin.adapters.admin_api_client import AdminApiClient
from shop_admin.domain.identity import Session
from shop_admin.domain.orders import ORDER_STATUSES
from shop_admin.domain.queries import QueryEntry
from shop_admin.services.mutations import (
    ErrorCallback,
    MutationExecutor,
    SuccessCallback,
)
from shop_admin.services.queries import QueryClient
from shop_admin.services.sessions import SessionStore

DASHBOARD_KEY = "dashboard-stats"
ORDERS_KEY = "orders"
PAYMENTS_KEY = "payments"


@dataclass
class AdminService:
    """Service for the dashboard, order and payment views."""

    api_client: AdminApiClient
    session_store: SessionStore
    query_client: QueryClient
    mutation_executor: MutationExecutor

    async def dashboard(self) -> QueryEntry:
        """Return the dashboard statistics query."""
        return await self.query_client.query(
            DASHBOARD_KEY,
            lambda: self.api_client.get_dashboard(self.session_store.transport),
        )

    async def orders(self) -> QueryEntry:
        """Return the order listing query."""
        return await self.query_client.query(
            ORDERS_KEY,
            lambda: self.api_client.list_orders(self.session_store.transport),
        )

    async def payments(self) -> QueryEntry:
        """Return the payment listing query."""
        return await self.query_client.query(
            PAYMENTS_KEY,
            lambda: self.api_client.list_payments(self.session_store.transport),
        )

    async def update_order_status(
        self,
        order_id: str,
        status: str,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Change an order's status, then refresh the views that show it."""
        if status not in ORDER_STATUSES:
            raise ValueError(f"Unknown order status: {status}")
        await self.mutation_executor.mutate(
            lambda: self.api_client.update_order_status(
                self.session_store.transport, order_id, status
            ),
            on_success=on_success,
            on_error=on_error,
            invalidates=(ORDERS_KEY, DASHBOARD_KEY),
            key=f"order:{order_id}",
        )

    async def login(self, email: str, password: str) -> Session:
        """Log in and start from an empty cache, whether or not it succeeds."""
        try:
            return await self.session_store.login(email, password)
        finally:
            self.query_client.clear()

    def logout(self) -> None:
        """End the session and drop data cached for it."""
        self.session_store.logout()
        self.query_client.clear()
