"""MongoDB-backed implementation of ProductRepository."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from bson import Decimal128, ObjectId
from pymongo import DESCENDING
from pymongo.client_session import ClientSession
from pymongo.database import Database

from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.criteria import ProductCriteria
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.infrastructure.persistence.mongo_client import NAME_COLLATION, PRODUCTS

NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]


class MongoProductRepository(ProductRepository):
    """Product storage; every call runs in ``session`` when one is given."""

    def __init__(self, db: Database, session: ClientSession | None = None) -> None:
        self._collection = db[PRODUCTS]
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        raw = self._collection.find_one({"_id": ObjectId(product_id)}, session=self._session)
        return self._to_domain(raw) if raw is not None else None

    def get_many(self, product_ids: list[str]) -> dict[str, Product]:
        if not product_ids:
            return {}
        cursor = self._collection.find(
            {"_id": {"$in": [ObjectId(pid) for pid in product_ids]}},
            session=self._session,
        )
        products = [self._to_domain(raw) for raw in cursor]
        return {p.id: p for p in products}  # type: ignore[misc]

    def get_by_name(self, name: str) -> Product | None:
        raw = self._collection.find_one(
            {"name": name}, collation=NAME_COLLATION, session=self._session
        )
        return self._to_domain(raw) if raw is not None else None

    def search(self, criteria: ProductCriteria, skip: int, limit: int) -> list[Product]:
        cursor = (
            self._collection.find(self._to_query(criteria), session=self._session)
            .sort(NEWEST_FIRST)
            .skip(skip)
            .limit(limit)
        )
        return [self._to_domain(raw) for raw in cursor]

    def count(self, criteria: ProductCriteria) -> int:
        return self._collection.count_documents(self._to_query(criteria), session=self._session)

    def add(self, product: Product) -> str:
        raw = self._to_raw(product)
        result = self._collection.insert_one(raw, session=self._session)
        product.id = str(result.inserted_id)
        return product.id

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        result = self._collection.update_one(
            {"_id": ObjectId(product_id), "stock_quantity": {"$gte": quantity}},
            {
                "$inc": {"stock_quantity": -quantity},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
            session=self._session,
        )
        return result.modified_count == 1

    # --- Queries --------------------------------------------------------------

    @staticmethod
    def _to_query(criteria: ProductCriteria) -> dict:
        query: dict = {"is_active": True}
        if criteria.search:
            pattern = {"$regex": re.escape(criteria.search), "$options": "i"}
            query["$or"] = [{"name": pattern}, {"description": pattern}]
        price: dict = {}
        if criteria.min_price is not None:
            price["$gte"] = Decimal128(criteria.min_price)
        if criteria.max_price is not None:
            price["$lte"] = Decimal128(criteria.max_price)
        if price:
            query["price"] = price
        return query

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        raw = {
            "name": product.name,
            "description": product.description,
            "price": Decimal128(product.price.amount),
            "stock_quantity": product.stock_quantity,
            "is_active": product.is_active,
            "created_at": product.created_at,
            "updated_at": product.updated_at,
        }
        if product.id is not None:
            raw["_id"] = ObjectId(product.id)
        return raw

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=str(raw["_id"]),
            name=raw["name"],
            description=raw["description"],
            price=Money.of(raw["price"].to_decimal()),
            stock_quantity=raw["stock_quantity"],
            is_active=raw.get("is_active", True),
            created_at=raw["created_at"],
            updated_at=raw.get("updated_at", raw["created_at"]),
        )
