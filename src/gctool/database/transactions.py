"""Transactions repository.

Transactions are loaded together with their splits and each split's account
from a single left join, then folded back into nested objects. Paging is
applied to transaction guids first so a page never cuts a transaction's
splits short.
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence

from sqlalchemy.engine import RowMapping

from gctool.database.accounts import AccountsRepository, AccountTree
from gctool.database.base import Repository
from gctool.database.mappers import account_from_row, split_from_row, transaction_from_row
from gctool.database.query import TransactionQuery
from gctool.domain.entities import Account, Transaction
from gctool.domain.errors import TransactionNotFoundError, transaction_not_found

logger = logging.getLogger(__name__)


class TransactionsRepository(Repository):
    """Read-only access to transactions with their splits."""

    def get(self, guid: str) -> Transaction:
        transactions = self.all(TransactionQuery().where("transactions.guid = ?", guid))
        if not transactions:
            raise TransactionNotFoundError(transaction_not_found(guid))
        return transactions[0]

    def all(self, query: TransactionQuery) -> list[Transaction]:
        """Return matching transactions, each with its complete split list.

        When the query filters, orders or pages, the matching guids are
        selected first at transaction grain and the join is then run for
        exactly those guids. Otherwise the join runs unrestricted.
        """
        guids: Optional[list[str]] = None
        if query.has_predicates or query.is_ordered or query.is_paginated:
            guids = self.guids(query)
            if not guids:
                return []
            rows = self._fetch_query(query.scoped_to(guids))
        else:
            rows = self._fetch_query(query)

        transactions = self._flatten(rows)
        if guids is not None:
            transactions = [transactions[g] for g in guids if g in transactions]
        else:
            transactions = list(transactions.values())
        logger.debug("loaded %d transactions", len(transactions))
        return transactions

    def guids(self, query: TransactionQuery) -> list[str]:
        """Guids of the matching transactions, ordered and paged like ``query``."""
        rows = self._fetch(query.build_guids(), query.args())
        return [row["transaction_guid"] for row in rows]

    def _flatten(self, rows: Sequence[RowMapping]) -> dict[str, Transaction]:
        """Fold joined rows into transactions keyed by guid.

        The dict keeps first-seen order; rows without a split add nothing
        to their transaction.
        """
        transactions: dict[str, Transaction] = {}
        order: list[str] = []
        tree: Optional[AccountTree] = None

        for row in rows:
            guid = row["transaction_guid"]
            transaction = transactions.get(guid)
            if transaction is None:
                transaction = transaction_from_row(row, prefix="transaction_")
                transactions[guid] = transaction
                order.append(guid)

            if row["split_guid"] is None:
                continue

            split = split_from_row(row, prefix="split_")
            if row["account_guid"] is not None:
                if tree is None:
                    tree = AccountsRepository(self.executor).tree()
                split = replace(split, account=self._account_snapshot(row, tree))
            transaction.splits.append(split)

        return {guid: transactions[guid] for guid in order}

    @staticmethod
    def _account_snapshot(row: RowMapping, tree: AccountTree) -> Account:
        account = account_from_row(row, prefix="account_")
        return replace(account, full_name=tree.full_name(account.guid))
