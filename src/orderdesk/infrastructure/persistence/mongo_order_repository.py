"""MongoDB-backed implementation of OrderRepository.

Line items are stored under the ``products`` key of each order document.
"""

from __future__ import annotations

import re

from bson import Decimal128, ObjectId
from pymongo import DESCENDING
from pymongo.client_session import ClientSession
from pymongo.database import Database

from orderdesk.domain.model.order import Order, OrderLineItem, OrderStatus
from orderdesk.domain.model.value_objects import Money, Quantity
from orderdesk.domain.repository.criteria import OrderCriteria
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.infrastructure.persistence.mongo_client import ORDERS

NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]


class MongoOrderRepository(OrderRepository):

    def __init__(self, db: Database, session: ClientSession | None = None) -> None:
        self._collection = db[ORDERS]
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        raw = self._collection.find_one({"_id": ObjectId(order_id)}, session=self._session)
        return self._to_domain(raw) if raw is not None else None

    def search(self, criteria: OrderCriteria, skip: int, limit: int) -> list[Order]:
        cursor = (
            self._collection.find(self._to_query(criteria), session=self._session)
            .sort(NEWEST_FIRST)
            .skip(skip)
            .limit(limit)
        )
        return [self._to_domain(raw) for raw in cursor]

    def count(self, criteria: OrderCriteria) -> int:
        return self._collection.count_documents(self._to_query(criteria), session=self._session)

    def add(self, order: Order) -> str:
        result = self._collection.insert_one(self._to_raw(order), session=self._session)
        order.id = str(result.inserted_id)
        return order.id

    # --- Queries --------------------------------------------------------------

    @staticmethod
    def _to_query(criteria: OrderCriteria) -> dict:
        query: dict = {}
        if criteria.customer_name:
            query["customer_name"] = {
                "$regex": re.escape(criteria.customer_name),
                "$options": "i",
            }
        if criteria.status is not None:
            query["status"] = criteria.status.value
        order_date: dict = {}
        if criteria.start_date is not None:
            order_date["$gte"] = criteria.start_date
        if criteria.end_date is not None:
            order_date["$lte"] = criteria.end_date
        if order_date:
            query["order_date"] = order_date
        return query

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        raw = {
            "customer_name": order.customer_name,
            "products": [
                {
                    "product_id": ObjectId(item.product_id),
                    "quantity": item.quantity.value,
                    "price": Decimal128(item.price.amount),
                    "subtotal": Decimal128(item.subtotal.amount),
                }
                for item in order.items
            ],
            "total_price": Decimal128(order.total_price.amount),
            "status": order.status.value,
            "order_date": order.order_date,
            "created_at": order.created_at,
            "updated_at": order.updated_at,
        }
        if order.id is not None:
            raw["_id"] = ObjectId(order.id)
        return raw

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                product_id=str(i["product_id"]),
                quantity=Quantity(i["quantity"]),
                price=Money.of(i["price"].to_decimal()),
                subtotal=Money.of(i["subtotal"].to_decimal()),
            )
            for i in raw["products"]
        ]
        return Order(
            id=str(raw["_id"]),
            customer_name=raw["customer_name"],
            items=items,
            total_price=Money.of(raw["total_price"].to_decimal()),
            status=OrderStatus(raw["status"]),
            order_date=raw["order_date"],
            created_at=raw["created_at"],
            updated_at=raw.get("updated_at", raw["created_at"]),
        )
