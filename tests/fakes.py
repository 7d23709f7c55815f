"""In-memory fakes for testing.

These implement the same abstract interfaces as the MongoDB classes
but keep everything in dicts.  No network, no side effects.

``InMemoryStore`` holds the committed state.  ``FakeUnitOfWork`` takes the
store lock for its whole lifetime (so transactions are serialized, as the
database would serialize conflicting writers), works on a deep copy, and
swaps the copy in only on commit.
"""

from __future__ import annotations

import copy
import itertools
import threading
from dataclasses import dataclass, field

from orderdesk.domain.model.order import Order
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.criteria import OrderCriteria, ProductCriteria
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.domain.repository.unit_of_work import UnitOfWork
from orderdesk.infrastructure.bootstrap import Container


@dataclass
class Tables:
    products: dict[str, Product] = field(default_factory=dict)
    orders: dict[str, Order] = field(default_factory=dict)


class InMemoryStore:

    def __init__(self) -> None:
        self.tables = Tables()
        self.lock = threading.Lock()
        self.commits = 0
        self.rollbacks = 0
        self.fail_order_insert: Exception | None = None
        self._ids = itertools.count(1)

    def new_id(self) -> str:
        # Monotonic, so "newest first" is "highest ID first"
        return f"{next(self._ids):024x}"

    def product(self, product_id: str) -> Product:
        return self.tables.products[product_id]


class _FakeRepository:

    def __init__(self, store: InMemoryStore, tables: Tables | None = None) -> None:
        self._store = store
        self._own_tables = tables

    @property
    def _tables(self) -> Tables:
        return self._own_tables if self._own_tables is not None else self._store.tables


class FakeProductRepository(_FakeRepository, ProductRepository):

    def get_by_id(self, product_id: str) -> Product | None:
        return copy.deepcopy(self._tables.products.get(product_id))

    def get_many(self, product_ids: list[str]) -> dict[str, Product]:
        return {
            pid: copy.deepcopy(self._tables.products[pid])
            for pid in product_ids
            if pid in self._tables.products
        }

    def get_by_name(self, name: str) -> Product | None:
        for p in self._tables.products.values():
            if p.name.lower() == name.lower():
                return copy.deepcopy(p)
        return None

    def search(self, criteria: ProductCriteria, skip: int, limit: int) -> list[Product]:
        matches = self._matching(criteria)
        return [copy.deepcopy(p) for p in matches[skip:skip + limit]]

    def count(self, criteria: ProductCriteria) -> int:
        return len(self._matching(criteria))

    def add(self, product: Product) -> str:
        product.id = self._store.new_id()
        self._tables.products[product.id] = copy.deepcopy(product)
        return product.id

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        product = self._tables.products.get(product_id)
        if product is None or product.stock_quantity < quantity:
            return False
        product.stock_quantity -= quantity
        return True

    def _matching(self, criteria: ProductCriteria) -> list[Product]:
        result = []
        for p in self._tables.products.values():
            if not p.is_active:
                continue
            if criteria.search:
                needle = criteria.search.lower()
                if needle not in p.name.lower() and needle not in p.description.lower():
                    continue
            if criteria.min_price is not None and p.price.amount < criteria.min_price:
                continue
            if criteria.max_price is not None and p.price.amount > criteria.max_price:
                continue
            result.append(p)
        return sorted(result, key=lambda p: p.id, reverse=True)


class FakeOrderRepository(_FakeRepository, OrderRepository):

    def get_by_id(self, order_id: str) -> Order | None:
        return copy.deepcopy(self._tables.orders.get(order_id))

    def search(self, criteria: OrderCriteria, skip: int, limit: int) -> list[Order]:
        matches = self._matching(criteria)
        return [copy.deepcopy(o) for o in matches[skip:skip + limit]]

    def count(self, criteria: OrderCriteria) -> int:
        return len(self._matching(criteria))

    def add(self, order: Order) -> str:
        if self._store.fail_order_insert is not None:
            raise self._store.fail_order_insert
        order.id = self._store.new_id()
        self._tables.orders[order.id] = copy.deepcopy(order)
        return order.id

    def _matching(self, criteria: OrderCriteria) -> list[Order]:
        result = []
        for o in self._tables.orders.values():
            if criteria.customer_name and criteria.customer_name.lower() not in o.customer_name.lower():
                continue
            if criteria.status is not None and o.status != criteria.status:
                continue
            if criteria.start_date is not None and o.order_date < criteria.start_date:
                continue
            if criteria.end_date is not None and o.order_date > criteria.end_date:
                continue
            result.append(o)
        return sorted(result, key=lambda o: o.id, reverse=True)


class FakeUnitOfWork(UnitOfWork):

    def __init__(self, store: InMemoryStore) -> None:
        super().__init__()
        self._store = store
        self._working: Tables | None = None
        self._holding_lock = False

    def begin(self) -> None:
        self._store.lock.acquire()
        self._holding_lock = True
        self._working = copy.deepcopy(self._store.tables)
        self.products = FakeProductRepository(self._store, self._working)
        self.orders = FakeOrderRepository(self._store, self._working)

    def _commit(self) -> None:
        assert self._working is not None
        self._store.tables = self._working
        self._store.commits += 1

    def rollback(self) -> None:
        self._working = None
        self._store.rollbacks += 1

    def close(self) -> None:
        if self._holding_lock:
            self._holding_lock = False
            self._store.lock.release()


# --- Helpers --------------------------------------------------------------------


def seed_product(
    store: InMemoryStore,
    name: str,
    price: str = "10.00",
    stock: int = 10,
    description: str | None = None,
    is_active: bool = True,
) -> str:
    """Insert a committed product directly and return its ID."""
    product = Product(
        id=None,
        name=name,
        description=description or f"{name} description",
        price=Money.of(price),
        stock_quantity=stock,
        is_active=is_active,
    )
    return FakeProductRepository(store).add(product)


def fake_container(store: InMemoryStore | None = None) -> Container:
    store = store or InMemoryStore()
    return Container(
        products=FakeProductRepository(store),
        orders=FakeOrderRepository(store),
        unit_of_work=lambda: FakeUnitOfWork(store),
    )
