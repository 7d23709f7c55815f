"""MongoDB client creation and index management.

Order placement uses multi-document transactions, so the server must be a
replica set (a single-node ``rs0`` is enough for development).
"""

from __future__ import annotations

import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collation import Collation, CollationStrength
from pymongo.database import Database
from pymongo.errors import PyMongoError

from orderdesk.config import Settings

logger = logging.getLogger(__name__)

PRODUCTS = "products"
ORDERS = "orders"

# Case-insensitive comparison for product names
NAME_COLLATION = Collation(locale="en", strength=CollationStrength.SECONDARY)


def create_client(settings: Settings) -> MongoClient:
    return MongoClient(settings.database_url, tz_aware=True)


def ensure_indexes(db: Database) -> None:
    products = db[PRODUCTS]
    products.create_index(
        [("name", ASCENDING)], unique=True, collation=NAME_COLLATION, name="name_ci_unique"
    )
    products.create_index([("price", ASCENDING)])
    products.create_index([("stock_quantity", ASCENDING)])
    products.create_index([("created_at", DESCENDING)])

    orders = db[ORDERS]
    orders.create_index([("customer_name", ASCENDING)])
    orders.create_index([("status", ASCENDING)])
    orders.create_index([("order_date", DESCENDING)])
    orders.create_index([("created_at", DESCENDING)])
    orders.create_index([("total_price", ASCENDING)])
    logger.info("Indexes ensured on %s.%s and %s.%s", db.name, PRODUCTS, db.name, ORDERS)


def ping(client: MongoClient) -> bool:
    try:
        client.admin.command("ping")
    except PyMongoError as exc:
        logger.warning("MongoDB ping failed: %s", exc)
        return False
    return True
