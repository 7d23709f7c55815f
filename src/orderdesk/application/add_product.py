"""Application service: Add Product use case."""

from __future__ import annotations

from typing import Any, Callable

from orderdesk.application.validation import validate_product
from orderdesk.domain.exceptions import ConflictError
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, payload: Any) -> str:
        """Validate and add a new product to the catalog; return its ID."""
        data = validate_product(payload).unwrap()

        with self._uow_factory() as uow:
            if uow.products.get_by_name(data.name) is not None:
                raise ConflictError(
                    "Product already exists",
                    ["A product with this name already exists"],
                )

            product = Product.create(
                name=data.name,
                description=data.description,
                price=Money.of(data.price),
                stock_quantity=data.stock_quantity,
            )
            product_id = uow.products.add(product)
            uow.commit()

        return product_id
