"""Tests for AccountService."""

import pytest

from gctool.domain.account import AccountService
from gctool.domain.errors import AlreadyExistsError, NotFoundError, ValidationError


@pytest.fixture
def account_service(engine):
    """Create an AccountService on the test ledger."""
    return AccountService(engine)


class TestGetAccount:
    """Tests for resolving accounts by guid or path."""

    def test_by_guid(self, account_service, ledger):
        assert account_service.get_account(ledger["Petrol"]).name == "Petrol"

    def test_by_path(self, account_service, ledger):
        account = account_service.get_account("expenses:automotive:PETROL")

        assert account.guid == ledger["Petrol"]
        assert account.full_name == "Expenses:Automotive:Petrol"

    def test_guid_wins_over_path(self, account_service, ledger, add_account):
        """The guid lookup is tried before the path."""
        add_account("expenses", "Shadow", parent_guid=ledger["Misc"])

        assert account_service.get_account("expenses").name == "Shadow"

    def test_unknown(self, account_service, ledger):
        with pytest.raises(NotFoundError):
            account_service.get_account("expenses:nothing")

    def test_ambiguous_path(self, account_service, ledger, add_account):
        add_account("misc-2-guid", "MISC", parent_guid=ledger["Expenses"])

        with pytest.raises(NotFoundError, match="ambiguous"):
            account_service.get_account("expenses:misc")

    def test_empty(self, account_service, ledger):
        with pytest.raises(ValidationError):
            account_service.get_account("  ")


class TestListAccounts:
    """Tests for listing accounts."""

    def test_name_like(self, account_service, ledger):
        accounts = account_service.list_accounts(name_like="%e%")

        assert [a.name for a in accounts] == [
            "Assets",
            "Automotive",
            "Checking",
            "Expenses",
            "Petrol",
            "Template Root",
        ]

    def test_type(self, account_service, ledger):
        accounts = account_service.list_accounts(account_type="bank")

        assert [a.full_name for a in accounts] == ["Assets:Checking"]

    def test_paging(self, account_service, ledger):
        first = account_service.list_accounts(limit=3, page=1)
        second = account_service.list_accounts(limit=3, page=2)

        assert len(first) == 3
        assert len(second) == 3
        assert not {a.guid for a in first} & {a.guid for a in second}


class TestUpdateAccount:
    """Tests for editing account metadata."""

    def test_description(self, account_service, ledger):
        account = account_service.update_account("expenses:misc", description="Sundries")

        assert account.description == "Sundries"
        assert account_service.get_account(ledger["Misc"]).description == "Sundries"

    def test_clear_description(self, account_service, ledger):
        account_service.update_account("expenses:misc", description="Sundries")

        account = account_service.update_account("expenses:misc", description="")

        assert account.description is None

    def test_rename(self, account_service, ledger):
        account = account_service.update_account("expenses:automotive:petrol", name="Fuel")

        assert account.full_name == "Expenses:Automotive:Fuel"
        assert account_service.get_account("expenses:automotive:fuel").guid == ledger["Petrol"]

    def test_rename_to_sibling_name(self, account_service, ledger):
        with pytest.raises(AlreadyExistsError):
            account_service.update_account("expenses:misc", name="automotive")

        assert account_service.get_account(ledger["Misc"]).name == "Misc"

    def test_rename_case_only(self, account_service, ledger):
        account = account_service.update_account("expenses:misc", name="MISC")

        assert account.name == "MISC"

    def test_move(self, account_service, ledger):
        account = account_service.update_account("expenses:misc", parent="expenses:automotive")

        assert account.full_name == "Expenses:Automotive:Misc"

    def test_move_clashes_with_new_sibling(self, account_service, ledger, add_account):
        add_account("misc-2-guid", "Misc", parent_guid=ledger["Automotive"])

        with pytest.raises(AlreadyExistsError):
            account_service.update_account(ledger["Misc"], parent="expenses:automotive")

    def test_move_below_descendant(self, account_service, ledger):
        with pytest.raises(ValidationError):
            account_service.update_account("expenses", parent="expenses:automotive:petrol")

    def test_move_below_itself(self, account_service, ledger):
        with pytest.raises(ValidationError):
            account_service.update_account("expenses", parent="expenses")

    def test_invalid_name(self, account_service, ledger):
        with pytest.raises(ValidationError):
            account_service.update_account("expenses:misc", name="a:b")

    def test_root(self, account_service, ledger):
        with pytest.raises(ValidationError):
            account_service.update_account(ledger["Root Account"], description="x")

    def test_flags(self, account_service, ledger):
        account = account_service.update_account("assets", hidden=True, placeholder=True)

        assert account.hidden == 1
        assert account.placeholder == 1

    def test_unknown(self, account_service, ledger):
        with pytest.raises(NotFoundError):
            account_service.update_account("expenses:nothing", description="x")

    def test_metadata_edit_with_duplicate_sibling(self, account_service, ledger, add_account):
        """Existing same-named siblings do not block edits that keep the name."""
        add_account("misc-2-guid", "MISC", parent_guid=ledger["Expenses"])

        account = account_service.update_account(ledger["Misc"], description="Sundries", hidden=True)

        assert account.description == "Sundries"
        assert account.hidden == 1

    def test_rename_with_duplicate_sibling(self, account_service, ledger, add_account):
        add_account("misc-2-guid", "MISC", parent_guid=ledger["Expenses"])

        with pytest.raises(AlreadyExistsError):
            account_service.update_account(ledger["Misc"], name="misc")
