"""Dashboard aggregate statistics."""

from datetime import datetime
from decimal import Decimal

from shop_admin.domain.base import ApiModel


class Overview(ApiModel):
    """Store-wide totals."""

    total_users: int
    total_orders: int
    total_products: int
    total_revenue: Decimal
    net_revenue: Decimal
    gateway_fees: Decimal
    successful_payments: int


class RecentOrder(ApiModel):
    """Row of the recent orders table."""

    id: str
    customer_name: str
    total: Decimal
    status: str
    payment_status: str | None = None
    payment_method: str | None = None
    created_at: datetime


class DailyRevenue(ApiModel):
    """Revenue collected on one day."""

    date: str
    revenue: Decimal


class DashboardStats(ApiModel):
    """Dashboard endpoint payload."""

    overview: Overview
    recent_orders: list[RecentOrder] = []
    daily_revenue: list[DailyRevenue] = []
