"""Integration tests for the AddProduct use case."""

from decimal import Decimal

import pytest

from orderdesk.application.add_product import AddProductHandler
from orderdesk.domain.exceptions import ConflictError, ValidationError
from tests.fakes import FakeUnitOfWork, InMemoryStore, seed_product


def _setup() -> tuple[AddProductHandler, InMemoryStore]:
    store = InMemoryStore()
    return AddProductHandler(lambda: FakeUnitOfWork(store)), store


def _payload(**overrides) -> dict:
    payload = {
        "name": "Widget",
        "description": "A very useful widget",
        "price": 19.99,
        "stock_quantity": 7,
    }
    payload.update(overrides)
    return payload


class TestAddProduct:

    def test_persists_product(self):
        handler, store = _setup()

        product_id = handler.handle(_payload())

        saved = store.product(product_id)
        assert saved.name == "Widget"
        assert saved.price.amount == Decimal("19.99")
        assert saved.stock_quantity == 7
        assert saved.is_active is True
        assert store.commits == 1

    def test_returns_24_hex_id(self):
        handler, _ = _setup()
        product_id = handler.handle(_payload())
        assert len(product_id) == 24
        int(product_id, 16)

    def test_whitespace_trimmed(self):
        handler, store = _setup()
        product_id = handler.handle(_payload(name="  Widget  ", description=" x "))
        assert store.product(product_id).name == "Widget"
        assert store.product(product_id).description == "x"

    def test_free_product_allowed(self):
        handler, store = _setup()
        product_id = handler.handle(_payload(price=0))
        assert store.product(product_id).price.amount == 0


class TestAddProductConflicts:

    def test_duplicate_name_rejected_case_insensitively(self):
        handler, store = _setup()
        seed_product(store, "Widget")

        with pytest.raises(ConflictError, match="Product already exists") as info:
            handler.handle(_payload(name="wIdGeT"))

        assert info.value.errors == ["A product with this name already exists"]
        assert len(store.tables.products) == 1
        assert store.rollbacks == 1


class TestAddProductValidation:

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"name": ""}, "name"),
            ({"name": "x" * 101}, "name"),
            ({"description": ""}, "description"),
            ({"description": "x" * 501}, "description"),
            ({"price": -1}, "price"),
            ({"price": 1.234}, "price"),
            ({"price": "abc"}, "price"),
            ({"stock_quantity": -1}, "stock_quantity"),
            ({"stock_quantity": 1.5}, "stock_quantity"),
            ({"stock_quantity": 2**64}, "stock_quantity"),
            ({"price": "1234567890123456789012345678901234567.00"}, "price"),
            ({"price": "10000000000.00"}, "price"),
            ({"is_active": False}, "is_active"),
        ],
    )
    def test_invalid_field_reported(self, overrides, field):
        handler, store = _setup()

        with pytest.raises(ValidationError) as info:
            handler.handle(_payload(**overrides))

        assert any(e.startswith(f"{field}:") for e in info.value.errors)
        assert store.tables.products == {}

    def test_missing_fields_all_reported(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError) as info:
            handler.handle({})
        reported = {e.split(":")[0] for e in info.value.errors}
        assert reported == {"name", "description", "price", "stock_quantity"}

    def test_non_object_body_rejected(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError) as info:
            handler.handle(["not", "an", "object"])
        assert info.value.errors == ["Request body must be a JSON object"]
