"""Composable SELECT builders for the accounts, transactions and splits tables.

Predicate fragments are authored in this codebase and carry ``?``
placeholders only. Values always travel separately through ``args()`` and
are bound by the driver.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from gctool.domain.errors import ValidationError


@dataclass(frozen=True)
class OrderField:
    """Single ORDER BY term."""

    field: str
    descending: bool = False

    def render(self) -> str:
        return f"{self.field} {'DESC' if self.descending else 'ASC'}"


class Query:
    """Accumulates predicates, ordering and paging for one entity.

    Subclasses set ``FROM`` and ``COLUMNS``. Every mutator returns ``self``
    so calls can be chained.
    """

    FROM: str = ""
    COLUMNS: tuple[str, ...] = ()

    def __init__(self) -> None:
        self._where: list[str] = []
        self._args: list[Any] = []
        self._order: list[OrderField] = []
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None

    def where(self, clause: str, *args: Any) -> "Query":
        """AND a predicate onto the query and append its arguments in order."""
        self._where.append(clause)
        self._args.extend(args)
        return self

    def where_in(self, column: str, values: Sequence[Any]) -> "Query":
        """AND a ``column IN (...)`` predicate with one placeholder per value."""
        if not values:
            return self.where("0 = 1")
        placeholders = ", ".join("?" for _ in values)
        return self.where(f"{column} IN ({placeholders})", *values)

    def order_by(self, field: str, descending: bool = False) -> "Query":
        self._order.append(OrderField(field, descending))
        return self

    def limit(self, limit: int) -> "Query":
        if limit < 0:
            raise ValidationError(f"Limit must not be negative, got {limit}")
        self._limit = limit
        return self

    def offset(self, offset: int) -> "Query":
        if offset < 0:
            raise ValidationError(f"Offset must not be negative, got {offset}")
        self._offset = offset
        return self

    def page(self, page: int, page_size: int) -> "Query":
        """Select a 1-indexed page of ``page_size`` rows."""
        if page < 1 or page_size < 1:
            raise ValidationError(
                f"Page and page size must be positive, got page={page} size={page_size}"
            )
        return self.limit(page_size).offset((page - 1) * page_size)

    @property
    def is_paginated(self) -> bool:
        return self._limit is not None or self._offset is not None

    @property
    def is_ordered(self) -> bool:
        return bool(self._order)

    @property
    def has_predicates(self) -> bool:
        return bool(self._where)

    def build(self) -> str:
        """Render the SELECT for the current state."""
        columns = ",\n\t".join(self.COLUMNS)
        return self._render(f"SELECT\n\t{columns}\nFROM {self.FROM}")

    def args(self) -> list[Any]:
        """Positional arguments, in placeholder order."""
        return list(self._args)

    def copy(self) -> "Query":
        """Return a clone that shares no mutable state with this query."""
        return copy.deepcopy(self)

    def _render(
        self, head: str, group_by: Optional[str] = None, paginate: bool = True
    ) -> str:
        parts = [head]
        if self._where:
            parts.append("WHERE " + " AND ".join(self._where))
        if group_by is not None:
            parts.append(f"GROUP BY {group_by}")
        if self._order:
            parts.append("ORDER BY " + ", ".join(o.render() for o in self._order))
        if paginate:
            if self._limit is not None:
                parts.append(f"LIMIT {self._limit}")
            elif self._offset is not None:
                # SQLite only accepts OFFSET after a LIMIT
                parts.append("LIMIT -1")
            if self._offset is not None:
                parts.append(f"OFFSET {self._offset}")
        return "\n".join(parts)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.build()!r}, args={self._args!r})"


class AccountQuery(Query):
    """Query over the ``accounts`` table."""

    FROM = "accounts"
    COLUMNS = (
        "guid",
        "name",
        "account_type",
        "commodity_guid",
        "commodity_scu",
        "non_std_scu",
        "parent_guid",
        "code",
        "description",
        "hidden",
        "placeholder",
    )


class SplitQuery(Query):
    """Query over the ``splits`` table."""

    FROM = "splits"
    COLUMNS = (
        "guid",
        "tx_guid",
        "account_guid",
        "memo",
        "action",
        "reconcile_state",
        "reconcile_date",
        "value_num",
        "value_denom",
        "quantity_num",
        "quantity_denom",
        "lot_guid",
    )


class TransactionQuery(Query):
    """Query over transactions left-joined to their splits and accounts.

    Predicates and ordering must use qualified column names
    (``transactions.description``, ``splits.account_guid``, ...). Each
    joined column is aliased with its entity prefix so rows can be scanned
    back into nested objects.
    """

    FROM = (
        "transactions\n"
        "LEFT JOIN splits ON splits.tx_guid = transactions.guid\n"
        "LEFT JOIN accounts ON accounts.guid = splits.account_guid"
    )
    COLUMNS = (
        tuple(
            f"transactions.{c} AS transaction_{c}"
            for c in ("guid", "currency_guid", "num", "post_date", "enter_date", "description")
        )
        + tuple(f"splits.{c} AS split_{c}" for c in SplitQuery.COLUMNS)
        + tuple(f"accounts.{c} AS account_{c}" for c in AccountQuery.COLUMNS)
    )

    def build_guids(self) -> str:
        """Render the transaction-grain query used to page by transaction.

        One row per matching transaction guid, with the same predicates,
        ordering, limit and offset as this query.
        """
        return self._render(
            f"SELECT transactions.guid AS transaction_guid\nFROM {self.FROM}",
            group_by="transactions.guid",
        )

    def scoped_to(self, guids: Sequence[str]) -> "TransactionQuery":
        """Return a copy restricted to ``guids`` with predicates and paging dropped.

        Ordering is kept; split guid is appended so splits come back in a
        stable order.
        """
        scoped = self.copy()
        scoped._where = []
        scoped._args = []
        scoped._limit = None
        scoped._offset = None
        scoped.where_in("transactions.guid", guids)
        scoped.order_by("splits.guid")
        return scoped
