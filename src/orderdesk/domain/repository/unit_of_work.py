"""Abstract unit of work: a scoped transactional context.

Every read and write made through ``uow.products`` and ``uow.orders``
belongs to one atomic transaction.  Used as a context manager:

    with uow_factory() as uow:
        ...
        uow.commit()

Leaving the block without ``commit()``, or through an exception, rolls
back every write.  The underlying session is released on every exit path.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from types import TracebackType

from orderdesk.domain.exceptions import DomainException
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository

    def __init__(self) -> None:
        self._committed = False

    def __enter__(self) -> UnitOfWork:
        self._committed = False
        self.begin()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            if exc is not None or not self._committed:
                self.rollback()
                if isinstance(exc, DomainException):
                    logger.info("Transaction rolled back: %s", exc)
                elif exc is not None:
                    logger.warning(
                        "Transaction rolled back after %s", type(exc).__name__
                    )
        finally:
            self.close()

    def commit(self) -> None:
        self._commit()
        self._committed = True

    @abstractmethod
    def begin(self) -> None:
        """Start the transaction."""

    @abstractmethod
    def _commit(self) -> None:
        """Make every write visible atomically."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every write made since ``begin()``."""

    @abstractmethod
    def close(self) -> None:
        """Release the underlying session."""
