"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (MongoDB, in-memory)
live in the infrastructure layer and in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.product import Product
from orderdesk.domain.repository.criteria import ProductCriteria


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_many(self, product_ids: list[str]) -> dict[str, Product]:
        """Return the products that exist among ``product_ids``, keyed by ID."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product whose name matches case-insensitively, or None."""

    @abstractmethod
    def search(self, criteria: ProductCriteria, skip: int, limit: int) -> list[Product]:
        """Return one page of active products, newest first."""

    @abstractmethod
    def count(self, criteria: ProductCriteria) -> int:
        """Return how many active products match ``criteria``."""

    @abstractmethod
    def add(self, product: Product) -> str:
        """Persist a new product, assign its ID and return it."""

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """Atomically remove ``quantity`` units if at least that many remain.

        Returns False (and changes nothing) when the stock is insufficient
        or the product does not exist.
        """
