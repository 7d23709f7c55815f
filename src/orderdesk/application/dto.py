"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the API/CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from orderdesk.domain.model.order import Order
from orderdesk.domain.model.product import Product

T = TypeVar("T")


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product ID + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    price: float
    stock_quantity: int
    is_active: bool
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class ProductSummaryDTO:
    """The product fields shown next to an order line item."""

    id: str
    name: str
    description: str


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: str
    product: ProductSummaryDTO | None  # None once the product is gone
    quantity: int
    price: float
    subtotal: float


@dataclass(frozen=True)
class OrderDTO:
    id: str
    customer_name: str
    products: list[OrderLineItemDTO]
    total_price: float
    status: str
    order_date: str
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class PaginationDTO:
    current_page: int
    total_pages: int
    total_items: int
    per_page: int
    has_next_page: bool
    has_prev_page: bool
    next_page: int | None
    prev_page: int | None


@dataclass(frozen=True)
class PageDTO(Generic[T]):
    items: list[T]
    pagination: PaginationDTO


# --- Mapping --------------------------------------------------------------------


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        description=product.description,
        price=float(product.price),
        stock_quantity=product.stock_quantity,
        is_active=product.is_active,
        created_at=product.created_at.isoformat(),
        updated_at=product.updated_at.isoformat(),
    )


def order_to_dto(order: Order, products: dict[str, Product]) -> OrderDTO:
    """Map an order, populating line items from ``products`` where present."""
    items = []
    for item in order.items:
        product = products.get(item.product_id)
        summary = (
            ProductSummaryDTO(
                id=product.id,  # type: ignore[arg-type]
                name=product.name,
                description=product.description,
            )
            if product is not None
            else None
        )
        items.append(
            OrderLineItemDTO(
                product_id=item.product_id,
                product=summary,
                quantity=item.quantity.value,
                price=float(item.price),
                subtotal=float(item.subtotal),
            )
        )
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_name=order.customer_name,
        products=items,
        total_price=float(order.total_price),
        status=order.status.value,
        order_date=order.order_date.isoformat(),
        created_at=order.created_at.isoformat(),
        updated_at=order.updated_at.isoformat(),
    )
