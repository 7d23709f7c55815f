"""Order aggregate.

The Order is an aggregate root that owns its line items.  Each line item
carries a price snapshot taken when the order is placed, so later product
price changes never affect an existing order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.value_objects import Money, Quantity

MAX_CUSTOMER_NAME_LENGTH = 100


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@dataclass
class OrderLineItem:
    """One product, quantity and price snapshot within an order."""

    product_id: str
    quantity: Quantity
    price: Money  # locked at order-creation time
    subtotal: Money = field(default_factory=Money.zero)

    def compute_subtotal(self) -> Money:
        return self.price * self.quantity.value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules and finalizes the totals.  The ``__init__`` is kept
    simple so the repository can reconstitute persisted orders without
    re-validating.
    """

    id: str | None
    customer_name: str
    items: list[OrderLineItem]
    total_price: Money = field(default_factory=Money.zero)
    status: OrderStatus = OrderStatus.PENDING
    order_date: datetime = field(default_factory=_utcnow)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(customer_name: str, items: list[OrderLineItem]) -> Order:
        """Create a new order, enforcing all invariants."""
        customer_name = (customer_name or "").strip()
        if not customer_name:
            raise ValidationError("Customer name is required")
        if len(customer_name) > MAX_CUSTOMER_NAME_LENGTH:
            raise ValidationError(
                f"Customer name cannot exceed {MAX_CUSTOMER_NAME_LENGTH} characters"
            )
        if not items:
            raise ValidationError("Order must contain at least one product")

        order = Order(id=None, customer_name=customer_name, items=list(items))
        order.finalize()
        return order

    # --- Totals ---------------------------------------------------------------

    def calculate_total(self) -> Money:
        """Sum of price x quantity over all line items; does not mutate."""
        result = Money.zero()
        for item in self.items:
            result = result + item.compute_subtotal()
        return result

    def finalize(self) -> None:
        """Recompute every subtotal and the order total before persisting."""
        if not self.items:
            raise ValidationError("Order must contain at least one product")
        for item in self.items:
            item.subtotal = item.compute_subtotal()
        self.total_price = self.calculate_total()

    # --- State transitions ----------------------------------------------------

    def update_status(self, new_status: OrderStatus | str) -> None:
        try:
            status = OrderStatus(new_status)
        except ValueError as exc:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Invalid order status '{new_status}'. Allowed: {allowed}"
            ) from exc
        self.status = status
        self.updated_at = _utcnow()
