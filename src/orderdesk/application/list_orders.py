"""Application service: List Orders use case (query)."""

from __future__ import annotations

from typing import Any

from orderdesk.application.dto import OrderDTO, PageDTO, order_to_dto
from orderdesk.application.pagination import build_pagination
from orderdesk.application.validation import validate_order_query
from orderdesk.domain.repository.criteria import OrderCriteria
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository


class ListOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, params: Any) -> PageDTO[OrderDTO]:
        query = validate_order_query(params).unwrap("Invalid pagination parameters")
        criteria = OrderCriteria(
            customer_name=query.customer_name,
            status=query.status,
            start_date=query.start_date,
            end_date=query.end_date,
        )

        orders = self._order_repo.search(criteria, skip=query.skip, limit=query.limit)
        total = self._order_repo.count(criteria)

        # One lookup for every product referenced on this page
        product_ids = sorted({i.product_id for o in orders for i in o.items})
        products = self._product_repo.get_many(product_ids)

        return PageDTO(
            items=[order_to_dto(o, products) for o in orders],
            pagination=build_pagination(query.page, query.limit, total),
        )
