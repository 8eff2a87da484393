"""Shared pytest fixtures for gctool tests."""

import os
import tempfile

import pytest
from sqlalchemy.orm import Session

from gctool.database import models
from gctool.database.factories import create_sqlite_engine
from gctool.database.models import initialize_schema

# guid -> (name, account_type, parent guid)
LEDGER_ACCOUNTS = {
    "root-guid": ("Root Account", "ROOT", None),
    "template-root-guid": ("Template Root", "ROOT", None),
    "expenses-guid": ("Expenses", "EXPENSE", "root-guid"),
    "automotive-guid": ("Automotive", "EXPENSE", "expenses-guid"),
    "petrol-guid": ("Petrol", "EXPENSE", "automotive-guid"),
    "misc-guid": ("Misc", "EXPENSE", "expenses-guid"),
    "assets-guid": ("Assets", "ASSET", "root-guid"),
    "checking-guid": ("Checking", "BANK", "assets-guid"),
}


@pytest.fixture
def temp_db():
    """Create a temporary database file for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".gnucash")
    os.close(fd)

    yield db_path

    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def engine(temp_db):
    """Engine on an empty ledger with the GnuCash tables created."""
    engine = create_sqlite_engine(temp_db)
    initialize_schema(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def add_account(engine):
    """Insert an account row."""

    def _add(guid, name, account_type="EXPENSE", parent_guid=None, **fields):
        with Session(engine) as session:
            session.add(
                models.Account(
                    guid=guid,
                    name=name,
                    account_type=account_type,
                    parent_guid=parent_guid,
                    commodity_scu=100,
                    non_std_scu=0,
                    **fields,
                )
            )
            session.commit()
        return guid

    return _add


@pytest.fixture
def ledger(add_account):
    """Seed a small account tree and return its guids keyed by account name."""
    for guid, (name, account_type, parent_guid) in LEDGER_ACCOUNTS.items():
        add_account(guid, name, account_type, parent_guid)
    return {name: guid for guid, (name, _, _) in LEDGER_ACCOUNTS.items()}


@pytest.fixture
def make_transaction(engine):
    """Insert a transaction and its splits.

    ``splits`` is a list of (account guid, value in cents). Split guids are
    ``<tx guid>-s<index>``.
    """

    def _make(guid, description="Test", post_date="2024-01-15 10:00:00", splits=()):
        with Session(engine) as session:
            session.add(
                models.Transaction(
                    guid=guid,
                    currency_guid="eur-guid",
                    num="",
                    post_date=post_date,
                    enter_date=post_date,
                    description=description,
                )
            )
            for index, (account_guid, cents) in enumerate(splits):
                session.add(
                    models.Split(
                        guid=f"{guid}-s{index}",
                        tx_guid=guid,
                        account_guid=account_guid,
                        memo="",
                        action="",
                        reconcile_state="n",
                        reconcile_date=None,
                        value_num=cents,
                        value_denom=100,
                        quantity_num=cents,
                        quantity_denom=100,
                        lot_guid=None,
                    )
                )
            session.commit()
        return guid

    return _make


@pytest.fixture
def split_accounts(engine):
    """Return {split guid: account guid} for one transaction, read directly."""

    def _read(tx_guid):
        with engine.connect() as conn:
            rows = conn.exec_driver_sql(
                "SELECT guid, account_guid FROM splits WHERE tx_guid = ?", (tx_guid,)
            ).all()
        return {guid: account_guid for guid, account_guid in rows}

    return _read


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
