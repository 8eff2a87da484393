"""Mapper functions converting result rows into domain entities.

Rows are mappings keyed by column name. Joined rows carry an entity prefix
(``split_guid``, ``account_name``, ...) which callers pass as ``prefix``.
Nullable columns become ``None``; nothing is defaulted to an empty string
or zero.
"""

from datetime import datetime
from typing import Any, Mapping, Optional

from gctool.domain import entities as domain
from gctool.domain.errors import StorageError

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored ``YYYY-MM-DD HH:MM:SS`` timestamp.

    Only the format GnuCash writes is accepted, so ``format_timestamp`` gives
    back the stored text unchanged.
    """
    if value is None:
        return None
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise StorageError(f"Unrecognised timestamp '{value}'") from e


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Format a timestamp the way GnuCash stores it."""
    if value is None:
        return None
    return value.strftime(TIMESTAMP_FORMAT)


def account_from_row(row: Mapping[str, Any], prefix: str = "") -> domain.Account:
    """Convert an accounts row to a domain Account."""
    return domain.Account(
        guid=row[f"{prefix}guid"],
        name=row[f"{prefix}name"],
        account_type=row[f"{prefix}account_type"],
        commodity_guid=row[f"{prefix}commodity_guid"],
        commodity_scu=row[f"{prefix}commodity_scu"],
        non_std_scu=row[f"{prefix}non_std_scu"],
        parent_guid=row[f"{prefix}parent_guid"],
        code=row[f"{prefix}code"],
        description=row[f"{prefix}description"],
        hidden=row[f"{prefix}hidden"],
        placeholder=row[f"{prefix}placeholder"],
    )


def split_from_row(row: Mapping[str, Any], prefix: str = "") -> domain.Split:
    """Convert a splits row to a domain Split."""
    return domain.Split(
        guid=row[f"{prefix}guid"],
        tx_guid=row[f"{prefix}tx_guid"],
        account_guid=row[f"{prefix}account_guid"],
        memo=row[f"{prefix}memo"],
        action=row[f"{prefix}action"],
        reconcile_state=row[f"{prefix}reconcile_state"],
        reconcile_date=parse_timestamp(row[f"{prefix}reconcile_date"]),
        value_num=row[f"{prefix}value_num"],
        value_denom=row[f"{prefix}value_denom"],
        quantity_num=row[f"{prefix}quantity_num"],
        quantity_denom=row[f"{prefix}quantity_denom"],
        lot_guid=row[f"{prefix}lot_guid"],
    )


def transaction_from_row(row: Mapping[str, Any], prefix: str = "") -> domain.Transaction:
    """Convert a transactions row to a domain Transaction with no splits."""
    return domain.Transaction(
        guid=row[f"{prefix}guid"],
        currency_guid=row[f"{prefix}currency_guid"],
        num=row[f"{prefix}num"],
        post_date=parse_timestamp(row[f"{prefix}post_date"]),
        enter_date=parse_timestamp(row[f"{prefix}enter_date"]),
        description=row[f"{prefix}description"],
    )


def account_to_params(account: domain.Account) -> tuple:
    """Column values for ``UPDATE accounts``, in SET order, guid last."""
    return (
        account.name,
        account.account_type,
        account.commodity_guid,
        account.commodity_scu,
        account.non_std_scu,
        account.parent_guid,
        account.code,
        account.description,
        account.hidden,
        account.placeholder,
        account.guid,
    )


def split_to_params(split: domain.Split) -> tuple:
    """Column values for ``UPDATE splits``, in SET order, guid last."""
    return (
        split.tx_guid,
        split.account_guid,
        split.memo,
        split.action,
        split.reconcile_state,
        format_timestamp(split.reconcile_date),
        split.value_num,
        split.value_denom,
        split.quantity_num,
        split.quantity_denom,
        split.lot_guid,
        split.guid,
    )
