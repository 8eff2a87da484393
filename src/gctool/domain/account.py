"""Account domain service."""

import logging
from dataclasses import replace
from typing import Optional

from sqlalchemy.engine import Engine

from gctool.database.query import AccountQuery
from gctool.database.store import Store, read_store, run_in_transaction
from gctool.domain.entities import Account
from gctool.domain.errors import (
    AlreadyExistsError,
    ValidationError,
    account_already_exists,
)
from gctool.utils.account_resolver import resolve_account

logger = logging.getLogger(__name__)


class AccountService:
    """Service for reading and editing accounts."""

    def __init__(self, engine: Engine):
        """Initialize account service.

        Args:
            engine: Engine of the ledger database
        """
        self.engine = engine

    def get_account(self, guid_or_path: str) -> Account:
        """Get an account by guid or by path.

        Raises:
            NotFoundError: If neither the guid nor the path resolves
        """
        with read_store(self.engine) as store:
            return resolve_account(store.accounts, guid_or_path)

    def list_accounts(
        self,
        name_like: Optional[str] = None,
        account_type: Optional[str] = None,
        limit: Optional[int] = None,
        page: Optional[int] = None,
    ) -> list[Account]:
        """List accounts ordered by name.

        Args:
            name_like: Optional SQL LIKE pattern on the account name
            account_type: Optional account type (e.g. "EXPENSE"), case-insensitive
            limit: Optional maximum number of accounts
            page: Optional 1-indexed page of ``limit`` accounts
        """
        query = AccountQuery()
        if name_like:
            query.where("name LIKE ?", name_like)
        if account_type:
            query.where("account_type = ? COLLATE NOCASE", account_type)
        query.order_by("name").order_by("guid")
        if limit is not None:
            if page is not None:
                query.page(page, limit)
            else:
                query.limit(limit)

        with read_store(self.engine) as store:
            return store.accounts.all(query)

    def update_account(
        self,
        guid_or_path: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        code: Optional[str] = None,
        parent: Optional[str] = None,
        hidden: Optional[bool] = None,
        placeholder: Optional[bool] = None,
    ) -> Account:
        """Update account metadata in one transaction.

        Only provided fields change. An empty description or code clears
        the field.

        Args:
            guid_or_path: Account to update
            name: New name
            description: New description ("" to clear)
            code: New code ("" to clear)
            parent: Guid or path of the new parent account
            hidden: Whether the account is hidden
            placeholder: Whether the account is a placeholder

        Returns:
            The updated account, re-read with its new full name

        Raises:
            NotFoundError: If the account or new parent does not exist
            AlreadyExistsError: If the target parent already has a child with
                the resulting name
            ValidationError: If the change is invalid (empty name, root
                account, or a parent below the account itself)
        """

        def apply(store: Store) -> Account:
            account = resolve_account(store.accounts, guid_or_path)
            if account.is_root:
                raise ValidationError("The root account cannot be edited")

            changes: dict = {}
            if name is not None:
                if not name.strip() or ":" in name:
                    raise ValidationError(f"Invalid account name '{name}'")
                changes["name"] = name
            if description is not None:
                changes["description"] = description or None
            if code is not None:
                changes["code"] = code or None
            if hidden is not None:
                changes["hidden"] = int(hidden)
            if placeholder is not None:
                changes["placeholder"] = int(placeholder)
            if parent is not None:
                new_parent = resolve_account(store.accounts, parent)
                self._check_parent(store, account, new_parent)
                changes["parent_guid"] = new_parent.guid

            updated = replace(account, **changes)
            if name is not None or parent is not None:
                self._check_unique_name(store, updated)
            store.accounts.update(updated)
            return store.accounts.get(updated.guid)

        account = run_in_transaction(self.engine, apply)
        logger.info("updated account %s (%s)", account.guid, account.full_name)
        return account

    @staticmethod
    def _check_parent(store: Store, account: Account, new_parent: Account) -> None:
        if new_parent.guid == account.guid:
            raise ValidationError("An account cannot be its own parent")
        if new_parent.guid in store.accounts.tree().descendants(account.guid):
            raise ValidationError(
                f"Cannot move '{account.full_name}' below its descendant '{new_parent.full_name}'"
            )

    @staticmethod
    def _check_unique_name(store: Store, account: Account) -> None:
        """Reject a name already used by a sibling under the target parent."""
        if store.accounts.sibling_exists(account.name, account.parent_guid, account.guid):
            parent_name = (
                store.accounts.get(account.parent_guid).full_name
                if account.parent_guid is not None
                else ""
            )
            raise AlreadyExistsError(account_already_exists(account.name, parent_name))
