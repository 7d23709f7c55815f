"""Application service: Show Order use case (query)."""

from __future__ import annotations

from orderdesk.application.dto import OrderDTO, order_to_dto
from orderdesk.application.validation import is_valid_object_id
from orderdesk.domain.exceptions import EntityNotFoundError, ValidationError
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, order_id: str) -> OrderDTO:
        if not is_valid_object_id(order_id):
            raise ValidationError("Invalid order ID format")

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError("Order not found")

        products = self._product_repo.get_many([i.product_id for i in order.items])
        return order_to_dto(order, products)
