"""Session handling of MongoUnitOfWork, against a mocked client."""

from unittest.mock import MagicMock

import pytest
from pymongo.errors import ConfigurationError, InvalidOperation

from orderdesk.infrastructure.persistence.mongo_unit_of_work import MongoUnitOfWork


def _setup() -> tuple[MongoUnitOfWork, MagicMock]:
    session = MagicMock()
    session.in_transaction = True
    client = MagicMock()
    client.start_session.return_value = session
    return MongoUnitOfWork(client, "orderdesk"), session


class TestMongoUnitOfWork:

    def test_commit_then_end_session(self):
        uow, session = _setup()

        with uow:
            uow.commit()

        session.commit_transaction.assert_called_once()
        session.abort_transaction.assert_not_called()
        session.end_session.assert_called_once()

    def test_error_aborts_and_ends_session(self):
        uow, session = _setup()

        with pytest.raises(RuntimeError):
            with uow:
                raise RuntimeError("boom")

        session.abort_transaction.assert_called_once()
        session.end_session.assert_called_once()

    def test_failed_start_transaction_ends_session(self):
        uow, session = _setup()
        session.start_transaction.side_effect = ConfigurationError(
            "Transactions are not supported"
        )

        with pytest.raises(ConfigurationError):
            with uow:
                pass

        session.end_session.assert_called_once()

    def test_commit_outside_transaction_rejected(self):
        uow, _ = _setup()
        with pytest.raises(InvalidOperation, match="outside of a transaction"):
            uow.commit()
