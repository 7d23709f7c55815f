"""MongoDB multi-document transaction as a UnitOfWork."""

from __future__ import annotations

from pymongo import MongoClient
from pymongo.client_session import ClientSession
from pymongo.errors import InvalidOperation
from pymongo.read_concern import ReadConcern
from pymongo.write_concern import WriteConcern

from orderdesk.domain.repository.unit_of_work import UnitOfWork
from orderdesk.infrastructure.persistence.mongo_order_repository import (
    MongoOrderRepository,
)
from orderdesk.infrastructure.persistence.mongo_product_repository import (
    MongoProductRepository,
)


class MongoUnitOfWork(UnitOfWork):
    """One client session and one transaction per instance.

    Snapshot reads with majority writes: a concurrent transaction touching
    the same product document fails with a write conflict instead of
    overwriting the stock level.
    """

    def __init__(self, client: MongoClient, database_name: str) -> None:
        super().__init__()
        self._client = client
        self._db = client[database_name]
        self._session: ClientSession | None = None

    def begin(self) -> None:
        session = self._client.start_session()
        try:
            session.start_transaction(
                read_concern=ReadConcern("snapshot"),
                write_concern=WriteConcern("majority"),
            )
        except Exception:
            session.end_session()
            raise
        self._session = session
        self.products = MongoProductRepository(self._db, self._session)
        self.orders = MongoOrderRepository(self._db, self._session)

    def _commit(self) -> None:
        if self._session is None:
            raise InvalidOperation("commit() called outside of a transaction")
        self._session.commit_transaction()

    def rollback(self) -> None:
        # A failed commit already ended the transaction
        if self._session is not None and self._session.in_transaction:
            self._session.abort_transaction()

    def close(self) -> None:
        if self._session is not None:
            self._session.end_session()
            self._session = None
