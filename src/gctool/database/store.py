"""Unit of work binding the repositories to one executor."""

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from gctool.database.accounts import AccountsRepository
from gctool.database.splits import SplitsRepository
from gctool.database.transactions import TransactionsRepository
from gctool.domain.errors import RollbackError, StorageError, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Store:
    """The three repositories sharing a single executor.

    Use ``for_connection`` for reads and ``for_transaction`` inside an open
    transaction for writes. A Store is not safe to share between threads.
    """

    def __init__(self, executor: Connection):
        self.executor = executor
        self.accounts = AccountsRepository(executor)
        self.transactions = TransactionsRepository(executor)
        self.splits = SplitsRepository(executor)

    @classmethod
    def for_connection(cls, connection: Connection) -> "Store":
        """Bind to a plain connection (read path)."""
        return cls(connection)

    @classmethod
    def for_transaction(cls, connection: Connection) -> "Store":
        """Bind to a connection with an open transaction (write path)."""
        if not connection.in_transaction():
            raise ValidationError("Store.for_transaction needs a connection inside begin()")
        return cls(connection)


@contextmanager
def read_store(engine: Engine) -> Iterator[Store]:
    """Open a connection, yield a read Store, and always close the connection."""
    try:
        connection = engine.connect()
    except SQLAlchemyError as e:
        raise StorageError(f"Could not open database: {e}") from e
    with connection:
        yield Store.for_connection(connection)


def run_in_transaction(engine: Engine, fn: Callable[[Store], T]) -> T:
    """Run ``fn`` with transaction-bound repositories, committing on success.

    If ``fn`` raises, the transaction is rolled back and the exception
    propagates unchanged. If the rollback fails too, a RollbackError holding
    both errors is raised instead.
    """
    try:
        connection = engine.connect()
    except SQLAlchemyError as e:
        raise StorageError(f"Could not open database: {e}") from e

    with connection:
        try:
            transaction = connection.begin()
        except SQLAlchemyError as e:
            raise StorageError(f"Could not begin transaction: {e}") from e

        try:
            result = fn(Store.for_transaction(connection))
        except Exception as e:
            try:
                transaction.rollback()
            except SQLAlchemyError as rollback_error:
                logger.error("rollback failed: %s", rollback_error)
                raise RollbackError(e, rollback_error) from e
            logger.warning("rolled back transaction: %s", e)
            raise

        try:
            transaction.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Commit failed: {e}") from e
        logger.info("committed transaction")
        return result
