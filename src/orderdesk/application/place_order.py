"""Application service: Place Order use case.

This is the only place that coordinates both aggregates.  Every product
lookup, stock decrement and the order insert run inside one unit of work,
so a failure at any step (a missing product, short stock, or a storage
error) leaves no decrement behind.

Items are processed in request order.  A product listed twice is
decremented twice; the second lookup sees the first decrement because it
reads through the same transaction.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from orderdesk.application.dto import OrderItemSpec
from orderdesk.application.validation import validate_order
from orderdesk.domain.exceptions import EntityNotFoundError, InsufficientStockError
from orderdesk.domain.model.order import Order, OrderLineItem
from orderdesk.domain.model.value_objects import Quantity
from orderdesk.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, payload: Any) -> str:
        """Validate a raw order request and place it; return the new order ID."""
        data = validate_order(payload).unwrap()
        specs = [OrderItemSpec(i.product_id, i.quantity) for i in data.products]
        return self.place(data.customer_name, specs)

    def place(self, customer_name: str, item_specs: list[OrderItemSpec]) -> str:
        line_items: list[OrderLineItem] = []

        with self._uow_factory() as uow:
            for spec in item_specs:
                product = uow.products.get_by_id(spec.product_id)
                if product is None or not product.is_active:
                    raise EntityNotFoundError(f"Product not found: {spec.product_id}")

                available = product.stock_quantity
                product.decrement_stock(spec.quantity)

                line_items.append(
                    OrderLineItem(
                        product_id=spec.product_id,
                        quantity=Quantity(spec.quantity),
                        price=product.price,  # <-- price snapshot
                    )
                )

                # Conditional at the storage level too; stock may have moved since the read
                if not uow.products.decrement_stock(spec.product_id, spec.quantity):
                    raise InsufficientStockError(product.name, available, spec.quantity)

            order = Order.create(customer_name=customer_name, items=line_items)
            order_id = uow.orders.add(order)
            uow.commit()

        logger.info(
            "Order %s placed for %s: %d item(s), total %s",
            order_id, order.customer_name, len(order.items), order.total_price,
        )
        return order_id
