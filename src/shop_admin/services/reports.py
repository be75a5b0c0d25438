"""Filtering and aggregation for the order and payment views."""

from collections import Counter
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from shop_admin.domain.dashboard import DashboardStats
from shop_admin.domain.orders import Order
from shop_admin.domain.payments import PAYMENT_STATUSES, Payment

ALL_STATUSES = "all"
COMPLETED = "COMPLETED"
_CENTS = Decimal("0.01")


def filter_orders(orders: Iterable[Order], search: str = "") -> list[Order]:
    """Return orders whose customer, id or order number match the search.

    Orders without a customer projection never match.
    """
    term = search.lower()
    matches = []
    for order in orders:
        if order.customer is None:
            continue
        fields = (
            order.customer.name,
            order.customer.email,
            order.id,
            order.order_number,
        )
        if _matches(term, fields):
            matches.append(order)
    return matches


def filter_payments(
    payments: Iterable[Payment], search: str = "", status: str = ALL_STATUSES
) -> list[Payment]:
    """Return payments matching the search term and status filter."""
    term = search.lower()
    matches = []
    for payment in payments:
        if status != ALL_STATUSES and payment.status != status:
            continue
        customer = payment.order.user
        fields = (
            customer.full_name,
            customer.email,
            payment.id,
            payment.gateway_payment_id,
            payment.transaction_id,
        )
        if _matches(term, fields):
            matches.append(payment)
    return matches


def total_revenue(payments: Iterable[Payment]) -> Decimal:
    """Sum the amounts of completed payments."""
    return sum(
        (payment.amount for payment in payments if payment.status == COMPLETED),
        Decimal("0"),
    )


def payment_status_counts(payments: Iterable[Payment]) -> dict[str, int]:
    """Count payments per known status."""
    counts = Counter(payment.status for payment in payments)
    return {status: counts.get(status, 0) for status in PAYMENT_STATUSES}


def format_money(amount: Decimal) -> str:
    """Render an amount as dollars with two decimals."""
    quantized = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    return f"{sign}${abs(quantized):,.2f}"


def dashboard_cards(stats: DashboardStats) -> list[dict[str, str]]:
    """Headline cards for the dashboard view."""
    overview = stats.overview
    return [
        {"title": "Total Revenue", "value": format_money(overview.total_revenue)},
        {"title": "Net Revenue", "value": format_money(overview.net_revenue)},
        {"title": "Gateway Fees", "value": format_money(overview.gateway_fees)},
        {"title": "Total Orders", "value": f"{overview.total_orders:,}"},
        {"title": "Total Users", "value": f"{overview.total_users:,}"},
        {"title": "Total Products", "value": f"{overview.total_products:,}"},
        {
            "title": "Successful Payments",
            "value": f"{overview.successful_payments:,}",
        },
    ]


def _matches(term: str, fields: Iterable[str | None]) -> bool:
    if not term:
        return True
    return any(value is not None and term in value.lower() for value in fields)
