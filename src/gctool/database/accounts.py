"""Accounts repository and account path resolution."""

import logging
from collections import defaultdict
from dataclasses import replace
from typing import Callable, Iterable, Optional

from gctool.database.base import Repository
from gctool.database.mappers import account_from_row, account_to_params
from gctool.database.query import AccountQuery
from gctool.domain.entities import Account, ROOT_ACCOUNT_TYPE
from gctool.domain.errors import (
    AmbiguousPathError,
    NotFoundError,
    account_not_found,
    account_parent_cycle,
    account_path_ambiguous,
    account_path_incomplete,
    account_path_not_found,
    root_account_not_found,
)

logger = logging.getLogger(__name__)

PATH_SEPARATOR = ":"
MAX_ACCOUNT_DEPTH = 64
ROOT_ACCOUNT_NAME = "Root Account"


def pick_root(candidates: list[Account]) -> Account:
    """Choose the ledger root among parentless ROOT accounts.

    GnuCash also keeps a "Template Root" for scheduled transactions, so the
    one named "Root Account" wins when there is more than one.
    """
    if not candidates:
        raise NotFoundError(root_account_not_found())
    if len(candidates) == 1:
        return candidates[0]
    for account in candidates:
        if account.name == ROOT_ACCOUNT_NAME:
            return account
    raise AmbiguousPathError(f"Found {len(candidates)} root accounts")


def resolve_full_name(account: Account, parent_of: Callable[[str], Account]) -> str:
    """Build the colon-joined name of ``account`` by walking its parents.

    ``parent_of`` fetches an account by guid and raises NotFoundError when
    the row is missing. The root's name is left out. A repeated guid or a
    chain deeper than MAX_ACCOUNT_DEPTH raises AmbiguousPathError.
    """
    names = [account.name]
    seen = {account.guid}
    current = account
    while current.parent_guid is not None:
        if current.parent_guid in seen or len(seen) > MAX_ACCOUNT_DEPTH:
            raise AmbiguousPathError(account_parent_cycle(account.guid))
        parent = parent_of(current.parent_guid)
        seen.add(parent.guid)
        if parent.is_root:
            break
        names.append(parent.name)
        current = parent
    names.reverse()
    return PATH_SEPARATOR.join(names)


class AccountTree:
    """All accounts of a ledger indexed by guid and by parent.

    Built from one query so full names and descendants can be computed
    without a round trip per ancestor.
    """

    def __init__(self, accounts: Iterable[Account]):
        self._by_guid: dict[str, Account] = {}
        self._children: dict[Optional[str], list[str]] = defaultdict(list)
        for account in accounts:
            self._by_guid[account.guid] = account
            self._children[account.parent_guid].append(account.guid)

    def get(self, guid: str) -> Account:
        try:
            return self._by_guid[guid]
        except KeyError:
            raise NotFoundError(account_not_found(guid)) from None

    @property
    def root(self) -> Account:
        return pick_root([
            self._by_guid[guid]
            for guid in self._children.get(None, [])
            if self._by_guid[guid].is_root
        ])

    def children(self, guid: str) -> list[Account]:
        return [self._by_guid[g] for g in self._children.get(guid, [])]

    def full_name(self, guid: str) -> str:
        return resolve_full_name(self.get(guid), self.get)

    def descendants(self, guid: str) -> set[str]:
        """Guids of every account below ``guid`` (excluding itself)."""
        found: set[str] = set()
        stack = [(guid, 0)]
        while stack:
            current, depth = stack.pop()
            if depth > MAX_ACCOUNT_DEPTH:
                raise AmbiguousPathError(account_parent_cycle(guid))
            for child in self.children(current):
                if child.guid in found or child.guid == guid:
                    continue
                found.add(child.guid)
                stack.append((child.guid, depth + 1))
        return found


class AccountsRepository(Repository):
    """Reads and updates rows of the ``accounts`` table."""

    def _fetch_one(self, query: AccountQuery) -> Optional[Account]:
        rows = self._fetch_query(query)
        if not rows:
            return None
        return account_from_row(rows[0])

    def _get_bare(self, guid: str) -> Account:
        account = self._fetch_one(AccountQuery().where("guid = ?", guid).limit(1))
        if account is None:
            raise NotFoundError(account_not_found(guid))
        return account

    def get(self, guid: str) -> Account:
        """Get an account by guid, with its full name filled in."""
        account = self._get_bare(guid)
        return replace(account, full_name=self.full_name(account))

    def full_name(self, account: Account) -> str:
        """Colon-joined path of ``account`` from below the root."""
        return resolve_full_name(account, self._get_bare)

    def root(self) -> Account:
        query = AccountQuery().where(
            "account_type = ? AND parent_guid IS NULL", ROOT_ACCOUNT_TYPE
        )
        return pick_root([account_from_row(row) for row in self._fetch_query(query)])

    def get_by_path(self, path: str) -> Account:
        """Resolve a case-insensitive path such as ``expenses:automotive:petrol``.

        Each segment must match exactly one child of the previous account.
        A segment matching no child, or several, raises NotFoundError.
        """
        segments = path.split(PATH_SEPARATOR)
        resolved = [self.root()]
        for segment in segments:
            if not segment:
                raise NotFoundError(account_path_not_found(path))
            query = AccountQuery().where(
                "name = ? COLLATE NOCASE AND parent_guid = ?", segment, resolved[-1].guid
            ).limit(2)
            rows = self._fetch_query(query)
            if not rows:
                logger.debug("no child '%s' under %s", segment, resolved[-1].guid)
                raise NotFoundError(account_path_not_found(path))
            if len(rows) > 1:
                raise NotFoundError(account_path_ambiguous(path, segment))
            resolved.append(account_from_row(rows[0]))

        if len(resolved) != len(segments) + 1:
            raise AmbiguousPathError(
                account_path_incomplete(path, len(resolved) - 1, len(segments))
            )

        account = resolved[-1]
        return replace(account, full_name=self.full_name(account))

    def tree(self) -> AccountTree:
        """Load every account into an AccountTree."""
        return AccountTree(account_from_row(row) for row in self._fetch_query(AccountQuery()))

    def all(self, query: AccountQuery) -> list[Account]:
        """List accounts matching ``query`` with full names filled in."""
        accounts = [account_from_row(row) for row in self._fetch_query(query)]
        if not accounts:
            return []
        tree = self.tree()
        return [replace(a, full_name=tree.full_name(a.guid)) for a in accounts]

    def sibling_exists(self, name: str, parent_guid: Optional[str], exclude_guid: str) -> bool:
        """Whether another account under ``parent_guid`` is called ``name``.

        Names are compared case-insensitively since paths resolve that way.
        """
        query = AccountQuery().where("name = ? COLLATE NOCASE", name)
        if parent_guid is None:
            query.where("parent_guid IS NULL")
        else:
            query.where("parent_guid = ?", parent_guid)
        query.where("guid != ?", exclude_guid).limit(1)
        return bool(self._fetch_query(query))

    def update(self, account: Account) -> None:
        """Write every stored column of ``account``.

        Raises NotFoundError when no row has the account's guid.
        """
        sql = """
UPDATE accounts
SET
\tname = ?,
\taccount_type = ?,
\tcommodity_guid = ?,
\tcommodity_scu = ?,
\tnon_std_scu = ?,
\tparent_guid = ?,
\tcode = ?,
\tdescription = ?,
\thidden = ?,
\tplaceholder = ?
WHERE guid = ?
"""
        if self._execute(sql, account_to_params(account)) == 0:
            raise NotFoundError(account_not_found(account.guid))
        logger.info("updated account %s", account.guid)
