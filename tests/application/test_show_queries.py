"""Integration tests for the ShowProduct and ShowOrder use cases."""

import pytest

from orderdesk.application.place_order import PlaceOrderHandler
from orderdesk.application.show_order import ShowOrderHandler
from orderdesk.application.show_product import ShowProductHandler
from orderdesk.domain.exceptions import EntityNotFoundError, ValidationError
from tests.fakes import (
    FakeOrderRepository,
    FakeProductRepository,
    FakeUnitOfWork,
    InMemoryStore,
    seed_product,
)

MISSING_ID = "0" * 23 + "f"


class TestShowProduct:

    def test_returns_product(self):
        store = InMemoryStore()
        pid = seed_product(store, "Widget", price="12.50", stock=4)

        dto = ShowProductHandler(FakeProductRepository(store)).handle(pid)

        assert dto.id == pid
        assert dto.price == 12.5
        assert dto.stock_quantity == 4

    def test_malformed_id_rejected(self):
        handler = ShowProductHandler(FakeProductRepository(InMemoryStore()))
        with pytest.raises(ValidationError, match="Invalid product ID format"):
            handler.handle("123")

    def test_missing_product(self):
        handler = ShowProductHandler(FakeProductRepository(InMemoryStore()))
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            handler.handle(MISSING_ID)

    def test_inactive_product_hidden(self):
        store = InMemoryStore()
        pid = seed_product(store, "Retired", is_active=False)
        with pytest.raises(EntityNotFoundError):
            ShowProductHandler(FakeProductRepository(store)).handle(pid)


class TestShowOrder:

    def _setup(self):
        store = InMemoryStore()
        pid = seed_product(store, "Widget", price="10.00", stock=5)
        order_id = PlaceOrderHandler(lambda: FakeUnitOfWork(store)).handle(
            {"customer_name": "Alice", "products": [{"product_id": pid, "quantity": 3}]}
        )
        handler = ShowOrderHandler(FakeOrderRepository(store), FakeProductRepository(store))
        return handler, order_id, pid

    def test_returns_populated_order(self):
        handler, order_id, pid = self._setup()

        dto = handler.handle(order_id)

        assert dto.customer_name == "Alice"
        assert dto.total_price == 30.0
        assert dto.status == "pending"
        assert dto.products[0].product.name == "Widget"
        assert dto.products[0].price == 10.0

    def test_repeated_reads_identical(self):
        handler, order_id, _ = self._setup()
        assert handler.handle(order_id) == handler.handle(order_id)

    def test_malformed_id_rejected(self):
        handler, _, _ = self._setup()
        with pytest.raises(ValidationError, match="Invalid order ID format"):
            handler.handle("zz" * 12)

    def test_missing_order(self):
        handler, _, _ = self._setup()
        with pytest.raises(EntityNotFoundError, match="Order not found"):
            handler.handle(MISSING_ID)
