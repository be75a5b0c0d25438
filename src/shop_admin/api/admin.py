"""Guarded console views for dashboard, orders and payments."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from shop_admin.api.request_models import OrderStatusRequest
from shop_admin.services.guard import Redirect, authorize
from shop_admin.services.reports import (
    ALL_STATUSES,
    dashboard_cards,
    filter_orders,
    filter_payments,
    format_money,
    payment_status_counts,
    total_revenue,
)

if TYPE_CHECKING:
    from shop_admin.containers import AppContainer
    from shop_admin.domain.dashboard import DashboardStats
    from shop_admin.domain.orders import OrderList
    from shop_admin.domain.payments import PaymentList
    from shop_admin.domain.queries import QueryEntry
    from shop_admin.errors import AdminClientError

router = APIRouter(tags=["console"])
logger = logging.getLogger(__name__)


async def require_admin(request: Request) -> None:
    """Redirect to the login view unless an admin session is active."""
    container: AppContainer = request.app.state.container
    decision = authorize(container.session_store.session)
    if isinstance(decision, Redirect):
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            headers={"Location": decision.location},
        )


@router.get("/dashboard", dependencies=[Depends(require_admin)])
async def dashboard(request: Request) -> dict[str, object]:
    """Return headline cards, recent orders and daily revenue."""
    container: AppContainer = request.app.state.container
    entry = await container.admin_service.dashboard()
    stats: DashboardStats = _require_data(
        entry, "Failed to load dashboard data. Please try again."
    )
    return {
        "cards": dashboard_cards(stats),
        "recent_orders": [
            order.model_dump(mode="json", by_alias=True)
            for order in stats.recent_orders
        ],
        "daily_revenue": [
            day.model_dump(mode="json", by_alias=True) for day in stats.daily_revenue
        ],
    }


@router.get("/orders", dependencies=[Depends(require_admin)])
async def list_orders(request: Request, search: str = "") -> dict[str, object]:
    """Return orders matching the search term."""
    container: AppContainer = request.app.state.container
    entry = await container.admin_service.orders()
    order_list: OrderList = _require_data(
        entry, "Failed to load orders. Please try again."
    )
    orders = filter_orders(order_list.orders, search)
    return {
        "orders": [order.model_dump(mode="json", by_alias=True) for order in orders],
        "count": len(orders),
    }


@router.get("/orders/{order_id}", dependencies=[Depends(require_admin)])
async def order_detail(order_id: str, request: Request) -> dict[str, object]:
    """Return one order with its shipping address and payment."""
    container: AppContainer = request.app.state.container
    entry = await container.admin_service.orders()
    order_list: OrderList = _require_data(
        entry, "Failed to load orders. Please try again."
    )
    for order in order_list.orders:
        if order.id == order_id:
            return {"order": order.model_dump(mode="json", by_alias=True)}
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail="Order not found"
    )


@router.post("/orders/{order_id}/status", dependencies=[Depends(require_admin)])
async def update_order_status(
    order_id: str, body: OrderStatusRequest, request: Request
) -> dict[str, object]:
    """Change an order's status and refresh the order listing."""
    container: AppContainer = request.app.state.container
    outcome: dict[str, object] = {}

    def on_success(result: object) -> None:
        outcome["result"] = result

    def on_error(error: AdminClientError) -> None:
        outcome["error"] = error.message

    try:
        await container.admin_service.update_order_status(
            order_id, body.status, on_success=on_success, on_error=on_error
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc

    if "error" in outcome:
        logger.warning(
            "Failed to update order %s status: %s", order_id, outcome["error"]
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to update order status",
        )
    return {"status": "ok", "result": outcome.get("result")}


@router.get("/payments", dependencies=[Depends(require_admin)])
async def list_payments(
    request: Request,
    search: str = "",
    status_filter: str = Query(default=ALL_STATUSES, alias="status"),
) -> dict[str, object]:
    """Return payments with revenue totals and status counts."""
    container: AppContainer = request.app.state.container
    entry = await container.admin_service.payments()
    payment_list: PaymentList = _require_data(
        entry, "Failed to load payments. Please try again."
    )
    payments = filter_payments(payment_list.payments, search, status_filter)
    revenue = total_revenue(payment_list.payments)
    return {
        "payments": [
            payment.model_dump(mode="json", by_alias=True) for payment in payments
        ],
        "count": len(payments),
        "total_revenue": str(revenue),
        "total_revenue_display": format_money(revenue),
        "status_counts": payment_status_counts(payment_list.payments),
    }


def _require_data(entry: QueryEntry, message: str) -> Any:
    if entry.is_error or entry.data is None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=message)
    return entry.data
