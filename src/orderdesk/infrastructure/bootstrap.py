"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator

from orderdesk.config import Settings
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.domain.repository.unit_of_work import UnitOfWork
from orderdesk.infrastructure.persistence.mongo_client import (
    create_client,
    ensure_indexes,
    ping,
)
from orderdesk.infrastructure.persistence.mongo_order_repository import (
    MongoOrderRepository,
)
from orderdesk.infrastructure.persistence.mongo_product_repository import (
    MongoProductRepository,
)
from orderdesk.infrastructure.persistence.mongo_unit_of_work import MongoUnitOfWork


def _noop() -> None:
    return None


@dataclass
class Container:
    """Everything the API and CLI layers need, behind domain interfaces."""

    products: ProductRepository
    orders: OrderRepository
    unit_of_work: Callable[[], UnitOfWork]
    database_ok: Callable[[], bool] = lambda: True
    startup: Callable[[], None] = field(default=_noop)
    shutdown: Callable[[], None] = field(default=_noop)


def mongo_container(settings: Settings) -> Container:
    client = create_client(settings)
    db = client[settings.database_name]
    return Container(
        products=MongoProductRepository(db),
        orders=MongoOrderRepository(db),
        unit_of_work=lambda: MongoUnitOfWork(client, settings.database_name),
        database_ok=lambda: ping(client),
        startup=lambda: ensure_indexes(db),
        shutdown=client.close,
    )


@contextmanager
def running(container: Container) -> Iterator[Container]:
    """Run the container's startup hook, and always its shutdown hook."""
    try:
        container.startup()
        yield container
    finally:
        container.shutdown()


def build_container(settings: Settings | None = None) -> Container:
    return mongo_container(settings or Settings.from_env())
