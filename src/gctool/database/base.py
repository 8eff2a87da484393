"""Repository base class shared by the accounts, transactions and splits stores."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Sequence

from sqlalchemy.engine import Connection, RowMapping
from sqlalchemy.exc import SQLAlchemyError

from gctool.database.query import Query
from gctool.domain.errors import StorageError

logger = logging.getLogger(__name__)


class Repository(ABC):
    """Runs queries against whatever executor it is bound to.

    The executor is a SQLAlchemy ``Connection``, either outside any
    transaction (read path) or inside ``Connection.begin()`` (write path).
    Repositories never begin, commit or roll back on their own.
    """

    def __init__(self, executor: Connection):
        self.executor = executor

    @abstractmethod
    def get(self, guid: str) -> Any:
        """Get one entity by guid. Raises NotFoundError when absent."""
        pass

    @abstractmethod
    def all(self, query: Query) -> list[Any]:
        """Return every entity matching ``query``."""
        pass

    def _fetch(self, sql: str, args: Sequence[Any]) -> list[RowMapping]:
        """Run a SELECT and return all rows as mappings.

        The cursor is drained before returning so it is closed on every path.
        """
        logger.debug("query: %s args=%r", sql, list(args))
        try:
            result = self.executor.exec_driver_sql(sql, tuple(args))
            return list(result.mappings().all())
        except SQLAlchemyError as e:
            raise StorageError(f"Query failed: {e}") from e

    def _fetch_query(self, query: Query) -> list[RowMapping]:
        return self._fetch(query.build(), query.args())

    def _execute(self, sql: str, args: Sequence[Any]) -> int:
        """Run a data-modifying statement and return the affected row count."""
        logger.debug("execute: %s args=%r", sql, list(args))
        try:
            result = self.executor.exec_driver_sql(sql, tuple(args))
            return result.rowcount
        except SQLAlchemyError as e:
            raise StorageError(f"Statement failed: {e}") from e
