"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.order import Order
from orderdesk.domain.repository.criteria import OrderCriteria


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def search(self, criteria: OrderCriteria, skip: int, limit: int) -> list[Order]:
        """Return one page of orders, newest first."""

    @abstractmethod
    def count(self, criteria: OrderCriteria) -> int:
        """Return how many orders match ``criteria``."""

    @abstractmethod
    def add(self, order: Order) -> str:
        """Persist a new order, assign its ID and return it."""
