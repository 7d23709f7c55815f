"""Application service: List Products use case (query)."""

from __future__ import annotations

from typing import Any

from orderdesk.application.dto import PageDTO, ProductDTO, product_to_dto
from orderdesk.application.pagination import build_pagination
from orderdesk.application.validation import validate_product_query
from orderdesk.domain.repository.criteria import ProductCriteria
from orderdesk.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, params: Any) -> PageDTO[ProductDTO]:
        query = validate_product_query(params).unwrap("Invalid pagination parameters")
        criteria = ProductCriteria(
            search=query.search,
            min_price=query.min_price,
            max_price=query.max_price,
        )

        products = self._product_repo.search(criteria, skip=query.skip, limit=query.limit)
        total = self._product_repo.count(criteria)

        return PageDTO(
            items=[product_to_dto(p) for p in products],
            pagination=build_pagination(query.page, query.limit, total),
        )
