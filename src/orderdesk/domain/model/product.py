"""Product aggregate.

Products live independently of orders.  Once created, the only mutation
on a product is a stock decrement during order placement.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from orderdesk.domain.exceptions import InsufficientStockError, ValidationError
from orderdesk.domain.model.value_objects import Money

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500


def has_sufficient_stock(stock_quantity: int, quantity: int) -> bool:
    """Return True if ``stock_quantity`` covers the requested ``quantity``."""
    return stock_quantity >= quantity


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``stock_quantity`` is never negative
    """

    id: str | None
    name: str
    description: str
    price: Money
    stock_quantity: int
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        name: str,
        description: str,
        price: Money,
        stock_quantity: int,
    ) -> Product:
        """Create a new, active product, enforcing all invariants."""
        name = (name or "").strip()
        description = (description or "").strip()

        if not name:
            raise ValidationError("Product name is required")
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Product name cannot exceed {MAX_NAME_LENGTH} characters"
            )
        if not description:
            raise ValidationError("Product description is required")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Product description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"
            )
        if not isinstance(stock_quantity, int) or stock_quantity < 0:
            raise ValidationError("Stock quantity must be a non-negative integer")

        return Product(
            id=None,
            name=name,
            description=description,
            price=price,
            stock_quantity=stock_quantity,
        )

    # --- Stock ------------------------------------------------------------------

    def is_in_stock(self, quantity: int = 1) -> bool:
        return has_sufficient_stock(self.stock_quantity, quantity)

    def decrement_stock(self, quantity: int) -> None:
        """Remove ``quantity`` units from stock.

        Raises InsufficientStockError rather than letting stock go negative.
        """
        if quantity <= 0:
            raise ValidationError("Decrement quantity must be positive")
        if not self.is_in_stock(quantity):
            raise InsufficientStockError(self.name, self.stock_quantity, quantity)
        self.stock_quantity -= quantity
        self.updated_at = datetime.now(timezone.utc)
