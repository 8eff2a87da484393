"""Tests for the transactions repository and join flattening."""

from datetime import datetime

import pytest

from gctool.database.query import TransactionQuery
from gctool.database.store import read_store
from gctool.domain.errors import TransactionNotFoundError


@pytest.fixture
def three_transactions(ledger, make_transaction):
    """Three transactions, two splits each, posted on consecutive days."""
    for day in (1, 2, 3):
        make_transaction(
            f"tx{day}",
            description=f"Fuel {day}",
            post_date=f"2024-03-0{day} 10:00:00",
            splits=[(ledger["Petrol"], 5000), (ledger["Checking"], -5000)],
        )
    return ["tx1", "tx2", "tx3"]


class TestAggregation:
    """Tests for rebuilding transactions from joined rows."""

    def test_limit_keeps_every_split(self, engine, three_transactions):
        """Limiting to two transactions still returns all four of their splits."""
        query = TransactionQuery().where("transactions.description LIKE ?", "Fuel%").limit(2)

        with read_store(engine) as store:
            transactions = store.transactions.all(query)

        assert len(transactions) == 2
        assert [len(t.splits) for t in transactions] == [2, 2]
        assert sum(len(t.splits) for t in transactions) == 4

    def test_pages_never_split_a_transaction(self, engine, ledger, make_transaction):
        for i, split_count in enumerate([1, 5, 2, 7, 3]):
            make_transaction(
                f"t{i}",
                post_date=f"2024-01-0{i + 1} 00:00:00",
                splits=[(ledger["Misc"], 100 + n) for n in range(split_count)],
            )

        seen = {}
        with read_store(engine) as store:
            for page in (1, 2, 3):
                query = TransactionQuery().order_by("transactions.post_date").page(page, 2)
                for transaction in store.transactions.all(query):
                    assert transaction.guid not in seen
                    seen[transaction.guid] = len(transaction.splits)

        assert seen == {"t0": 1, "t1": 5, "t2": 2, "t3": 7, "t4": 3}

    def test_ordering_is_kept(self, engine, three_transactions):
        query = TransactionQuery().order_by("transactions.post_date", descending=True)

        with read_store(engine) as store:
            guids = [t.guid for t in store.transactions.all(query)]

        assert guids == ["tx3", "tx2", "tx1"]

    def test_offset(self, engine, three_transactions):
        query = TransactionQuery().order_by("transactions.post_date").limit(5).offset(1)

        with read_store(engine) as store:
            guids = [t.guid for t in store.transactions.all(query)]

        assert guids == ["tx2", "tx3"]

    def test_split_filter_returns_whole_transaction(self, engine, ledger, make_transaction):
        """Filtering on one split's account still loads the other splits."""
        make_transaction(
            "mixed", splits=[(ledger["Petrol"], 100), (ledger["Misc"], 50), (ledger["Checking"], -150)]
        )
        make_transaction("other", splits=[(ledger["Misc"], 10), (ledger["Checking"], -10)])
        query = TransactionQuery().where("splits.account_guid = ?", ledger["Petrol"])

        with read_store(engine) as store:
            transactions = store.transactions.all(query)

        assert [t.guid for t in transactions] == ["mixed"]
        assert len(transactions[0].splits) == 3

    def test_no_matches(self, engine, three_transactions):
        query = TransactionQuery().where("transactions.description = ?", "nothing").limit(10)

        with read_store(engine) as store:
            assert store.transactions.all(query) == []

    def test_empty_ledger(self, engine):
        with read_store(engine) as store:
            assert store.transactions.all(TransactionQuery()) == []

    def test_transaction_without_splits(self, engine, ledger, make_transaction):
        make_transaction("bare", splits=[])
        make_transaction("full", splits=[(ledger["Misc"], 10), (ledger["Checking"], -10)])

        with read_store(engine) as store:
            transactions = {t.guid: t for t in store.transactions.all(TransactionQuery())}

        assert transactions["bare"].splits == []
        assert len(transactions["full"].splits) == 2

    def test_unfiltered_query(self, engine, three_transactions):
        with read_store(engine) as store:
            transactions = store.transactions.all(TransactionQuery())

        assert sorted(t.guid for t in transactions) == three_transactions
        assert all(len(t.splits) == 2 for t in transactions)

    def test_split_accounts_are_distinct_snapshots(self, engine, ledger, make_transaction):
        make_transaction(
            "fuel", splits=[(ledger["Petrol"], 5000), (ledger["Checking"], -5000)]
        )

        with read_store(engine) as store:
            transaction = store.transactions.get("fuel")

        accounts = {s.guid: s.account for s in transaction.splits}
        assert accounts["fuel-s0"].guid == ledger["Petrol"]
        assert accounts["fuel-s0"].full_name == "Expenses:Automotive:Petrol"
        assert accounts["fuel-s1"].guid == ledger["Checking"]
        assert accounts["fuel-s1"].full_name == "Assets:Checking"

    def test_split_with_unknown_account(self, engine, ledger, make_transaction):
        """A split whose account row is missing has no account snapshot."""
        make_transaction("lost", splits=[("gone-guid", 10), (ledger["Checking"], -10)])

        with read_store(engine) as store:
            transaction = store.transactions.get("lost")

        splits = {s.guid: s for s in transaction.splits}
        assert splits["lost-s0"].account is None
        assert splits["lost-s0"].account_guid == "gone-guid"
        assert splits["lost-s1"].account is not None

    def test_fields(self, engine, ledger, make_transaction):
        make_transaction(
            "tx", description="Shell", post_date="2024-05-06 07:08:09",
            splits=[(ledger["Petrol"], 1234)],
        )

        with read_store(engine) as store:
            transaction = store.transactions.get("tx")

        assert transaction.description == "Shell"
        assert transaction.currency_guid == "eur-guid"
        assert transaction.post_date == datetime(2024, 5, 6, 7, 8, 9)
        split = transaction.splits[0]
        assert (split.value_num, split.value_denom) == (1234, 100)
        assert split.tx_guid == "tx"


class TestGet:
    """Tests for fetching single transactions."""

    def test_get_unknown(self, engine, ledger):
        with read_store(engine) as store:
            with pytest.raises(TransactionNotFoundError):
                store.transactions.get("nope")

    def test_get(self, engine, three_transactions):
        with read_store(engine) as store:
            transaction = store.transactions.get("tx2")

        assert transaction.guid == "tx2"
        assert [s.guid for s in transaction.splits] == ["tx2-s0", "tx2-s1"]
