"""Payment transaction projections returned by the admin API."""

from datetime import datetime
from decimal import Decimal

from shop_admin.domain.base import ApiModel

PAYMENT_STATUSES = ("PENDING", "COMPLETED", "FAILED", "REFUNDED")


class PaymentCustomer(ApiModel):
    """Customer who placed the paid order."""

    first_name: str
    last_name: str
    email: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class PaymentOrder(ApiModel):
    """Order summary attached to a payment."""

    id: str
    total: Decimal
    user: PaymentCustomer


class Payment(ApiModel):
    """Payment transaction record."""

    id: str
    amount: Decimal
    status: str
    payment_method: str
    gateway_transaction_id: str | None = None
    gateway_provider: str | None = None
    gateway_payment_id: str | None = None
    transaction_id: str | None = None
    gateway_fee: Decimal = Decimal("0")
    net_amount: Decimal
    currency: str
    created_at: datetime
    paid_at: datetime | None = None
    failed_at: datetime | None = None
    failure_reason: str | None = None
    order: PaymentOrder


class PaymentList(ApiModel):
    """Payment listing payload."""

    payments: list[Payment]
    pagination: dict[str, object] | None = None
