"""Application service: Show Product use case (query)."""

from __future__ import annotations

from orderdesk.application.dto import ProductDTO, product_to_dto
from orderdesk.application.validation import is_valid_object_id
from orderdesk.domain.exceptions import EntityNotFoundError, ValidationError
from orderdesk.domain.repository.product_repository import ProductRepository


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> ProductDTO:
        if not is_valid_object_id(product_id):
            raise ValidationError("Invalid product ID format")

        # Inactive products are hidden from readers
        product = self._product_repo.get_by_id(product_id)
        if product is None or not product.is_active:
            raise EntityNotFoundError("Product not found")
        return product_to_dto(product)
