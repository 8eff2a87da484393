"""Transaction domain service."""

import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.engine import Engine

from gctool.database.mappers import DATE_FORMAT
from gctool.database.query import TransactionQuery
from gctool.database.store import Store, read_store, run_in_transaction
from gctool.domain.entities import Account, Transaction
from gctool.domain.errors import ValidationError
from gctool.utils.account_resolver import resolve_account

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50


def build_transaction_query(
    account: Optional[Account] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    description_like: Optional[str] = None,
) -> TransactionQuery:
    """Build a filter over transactions.

    Args:
        account: Only transactions with a split in this account
        start_date: Only transactions posted on or after this date
        end_date: Only transactions posted on or before this date
        description_like: SQL LIKE pattern on the description
    """
    query = TransactionQuery()
    if account is not None:
        query.where("splits.account_guid = ?", account.guid)
    if start_date is not None:
        query.where("transactions.post_date >= ?", start_date.strftime(DATE_FORMAT))
    if end_date is not None:
        # post_date carries a time part, so compare against the next day
        next_day = end_date + timedelta(days=1)
        query.where("transactions.post_date < ?", next_day.strftime(DATE_FORMAT))
    if description_like:
        query.where("transactions.description LIKE ?", description_like)
    return query


class TransactionService:
    """Service for reading transactions and moving splits between accounts."""

    def __init__(self, engine: Engine):
        """Initialize transaction service.

        Args:
            engine: Engine of the ledger database
        """
        self.engine = engine

    def resolve_account(self, guid_or_path: str) -> Account:
        """Resolve an account guid or path on a read connection."""
        with read_store(self.engine) as store:
            return resolve_account(store.accounts, guid_or_path)

    def get_transaction(self, guid: str) -> Transaction:
        """Get a transaction with its splits.

        Raises:
            TransactionNotFoundError: If no transaction has this guid
        """
        with read_store(self.engine) as store:
            return store.transactions.get(guid)

    def list_transactions(
        self,
        query: TransactionQuery,
        limit: Optional[int] = DEFAULT_LIMIT,
        page: Optional[int] = None,
    ) -> list[Transaction]:
        """List the newest matching transactions, each with all of its splits.

        Args:
            query: Filter built by build_transaction_query
            limit: Maximum number of transactions (None for no limit)
            page: Optional 1-indexed page of ``limit`` transactions
        """
        query = query.copy()
        query.order_by("transactions.post_date", descending=True)
        query.order_by("transactions.guid")
        if limit is not None:
            if page is not None:
                query.page(page, limit)
            else:
                query.limit(limit)

        with read_store(self.engine) as store:
            return store.transactions.all(query)

    def reassign_splits(
        self, tx_guid: str, source: Account, destination: Account
    ) -> Transaction:
        """Move every split of one transaction from ``source`` to ``destination``.

        Returns:
            The transaction as stored after the change

        Raises:
            TransactionNotFoundError: If the transaction does not exist
            ValidationError: If source and destination are the same account
        """
        self._check_accounts(source, destination)

        def apply(store: Store) -> Transaction:
            transaction = store.transactions.get(tx_guid)
            self._move_splits(store, transaction, source, destination)
            return store.transactions.get(tx_guid)

        return run_in_transaction(self.engine, apply)

    def bulk_reassign_splits(
        self, query: TransactionQuery, source: Account, destination: Account
    ) -> list[Transaction]:
        """Move splits from ``source`` to ``destination`` across all matches.

        Every matching transaction with a split in ``source`` is changed in
        a single database transaction: either all splits move or none do.

        Returns:
            The affected transactions as stored after the change
        """
        self._check_accounts(source, destination)
        query = query.copy().where("splits.account_guid = ?", source.guid)

        def apply(store: Store) -> list[Transaction]:
            matches = store.transactions.all(query)
            moved = 0
            for transaction in matches:
                moved += self._move_splits(store, transaction, source, destination)
            logger.info(
                "moving %d splits in %d transactions from %s to %s",
                moved,
                len(matches),
                source.full_name,
                destination.full_name,
            )
            guids = [t.guid for t in matches]
            if not guids:
                return []
            return store.transactions.all(TransactionQuery().where_in("transactions.guid", guids))

        return run_in_transaction(self.engine, apply)

    @staticmethod
    def _check_accounts(source: Account, destination: Account) -> None:
        if source.guid == destination.guid:
            raise ValidationError("Source and destination accounts are the same")

    @staticmethod
    def _move_splits(
        store: Store, transaction: Transaction, source: Account, destination: Account
    ) -> int:
        moved = 0
        for split in transaction.splits:
            if split.account_guid == source.guid:
                store.splits.update(replace(split, account_guid=destination.guid))
                moved += 1
        return moved
