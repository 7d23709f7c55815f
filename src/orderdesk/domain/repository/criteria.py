"""Listing criteria passed from the application layer to repositories."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from orderdesk.domain.model.order import OrderStatus


@dataclass(frozen=True)
class ProductCriteria:
    """Active products only; optional text search and price range."""

    search: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None


@dataclass(frozen=True)
class OrderCriteria:
    customer_name: str | None = None
    status: OrderStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
