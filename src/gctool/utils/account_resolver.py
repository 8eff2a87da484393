"""Utility for resolving an account guid or path to an account."""

from gctool.database.accounts import AccountsRepository
from gctool.domain.entities import Account
from gctool.domain.errors import NotFoundError, ValidationError


def resolve_account(accounts: AccountsRepository, guid_or_path: str) -> Account:
    """Resolve an account guid or colon-delimited path to an account.

    The guid lookup is tried first; the path is resolved only when no
    account has that guid. Any other failure of the guid lookup propagates.

    Args:
        accounts: AccountsRepository bound to an open connection
        guid_or_path: Account guid, or path such as "expenses:automotive:petrol"

    Returns:
        Account with its full name filled in

    Raises:
        ValidationError: If guid_or_path is empty
        NotFoundError: If neither the guid nor the path resolves, or a path
            segment matches more than one account
        AmbiguousPathError: If the parent chain is broken by a cycle
    """
    guid_or_path = guid_or_path.strip()
    if not guid_or_path:
        raise ValidationError("Missing account guid or path")

    try:
        return accounts.get(guid_or_path)
    except NotFoundError:
        pass

    return accounts.get_by_path(guid_or_path)
