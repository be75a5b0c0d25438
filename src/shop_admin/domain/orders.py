"""Order projections returned by the admin API."""

from datetime import datetime
from decimal import Decimal

from shop_admin.domain.base import ApiModel

ORDER_STATUSES = (
    "PENDING",
    "CONFIRMED",
    "PROCESSING",
    "SHIPPED",
    "DELIVERED",
    "CANCELLED",
)


class OrderCustomer(ApiModel):
    """Customer summary attached to an order."""

    name: str | None = None
    email: str | None = None


class OrderPayment(ApiModel):
    """Payment summary attached to an order."""

    status: str
    method: str
    amount: Decimal


class ShippingAddress(ApiModel):
    """Shipping destination for an order."""

    name: str
    address: str
    city: str
    state: str
    zip_code: str
    country: str


class Order(ApiModel):
    """Order with customer, payment and shipping projections."""

    id: str
    order_number: str | None = None
    total: Decimal
    status: str
    created_at: datetime
    customer: OrderCustomer | None = None
    payment: OrderPayment | None = None
    item_count: int = 0
    shipping_address: ShippingAddress | None = None


class OrderList(ApiModel):
    """Order listing payload."""

    orders: list[Order]
    pagination: dict[str, object] | None = None
