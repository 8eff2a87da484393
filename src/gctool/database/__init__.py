"""Storage layer for gctool."""

from gctool.database.factories import create_sqlite_engine
from gctool.database.query import AccountQuery, SplitQuery, TransactionQuery
from gctool.database.store import Store, read_store, run_in_transaction

__all__ = [
    "AccountQuery",
    "SplitQuery",
    "Store",
    "TransactionQuery",
    "create_sqlite_engine",
    "read_store",
    "run_in_transaction",
]
