"""Domain model entities for gctool.

These are pure data classes mirroring the rows GnuCash keeps in its SQL
backend. They are frozen; use ``dataclasses.replace`` to derive an updated
copy before handing it to a repository ``update``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

ROOT_ACCOUNT_TYPE = "ROOT"


@dataclass(frozen=True)
class Account:
    """Node of the account tree.

    ``full_name`` is derived from the parent chain and never stored.
    """

    guid: str
    name: str
    account_type: str
    commodity_scu: int
    non_std_scu: int
    parent_guid: Optional[str] = None
    commodity_guid: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    hidden: Optional[int] = None
    placeholder: Optional[int] = None
    full_name: str = ""

    @property
    def is_root(self) -> bool:
        return self.account_type.upper() == ROOT_ACCOUNT_TYPE


@dataclass(frozen=True)
class Split:
    """One leg of a transaction.

    Value and quantity are kept as integer numerator/denominator pairs.
    ``account`` is only populated when loaded together with its transaction.
    """

    guid: str
    tx_guid: str
    account_guid: str
    memo: str
    action: str
    reconcile_state: str
    value_num: int
    value_denom: int
    quantity_num: int
    quantity_denom: int
    reconcile_date: Optional[datetime] = None
    lot_guid: Optional[str] = None
    account: Optional[Account] = None


@dataclass(frozen=True)
class Transaction:
    """Transaction with its splits in storage order."""

    guid: str
    currency_guid: str
    num: str
    post_date: Optional[datetime] = None
    enter_date: Optional[datetime] = None
    description: Optional[str] = None
    splits: list[Split] = field(default_factory=list)
