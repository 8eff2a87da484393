"""SQLAlchemy models for the subset of the GnuCash SQL schema gctool uses.

Column types and nullability follow what GnuCash writes. The models are
used to create empty ledgers (tests, scratch files); gctool never alters the
schema of an existing file.
"""

from sqlalchemy import BigInteger, Column, Integer, String, Text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Account(Base):
    """Account tree node."""

    __tablename__ = "accounts"

    guid = Column(String(32), primary_key=True)
    name = Column(String(2048), nullable=False)
    account_type = Column(String(2048), nullable=False)
    commodity_guid = Column(String(32), nullable=True)
    commodity_scu = Column(Integer, nullable=False)
    non_std_scu = Column(Integer, nullable=False)
    parent_guid = Column(String(32), nullable=True)
    code = Column(String(2048), nullable=True)
    description = Column(String(2048), nullable=True)
    hidden = Column(Integer, nullable=True)
    placeholder = Column(Integer, nullable=True)


class Transaction(Base):
    """Transaction header."""

    __tablename__ = "transactions"

    guid = Column(String(32), primary_key=True)
    currency_guid = Column(String(32), nullable=False)
    num = Column(String(2048), nullable=False)
    post_date = Column(Text(19), nullable=True)
    enter_date = Column(Text(19), nullable=True)
    description = Column(String(2048), nullable=True)


class Split(Base):
    """Split (one leg of a transaction)."""

    __tablename__ = "splits"

    guid = Column(String(32), primary_key=True)
    tx_guid = Column(String(32), nullable=False, index=True)
    account_guid = Column(String(32), nullable=False, index=True)
    memo = Column(String(2048), nullable=False)
    action = Column(String(2048), nullable=False)
    reconcile_state = Column(String(1), nullable=False)
    reconcile_date = Column(Text(19), nullable=True)
    value_num = Column(BigInteger, nullable=False)
    value_denom = Column(BigInteger, nullable=False)
    quantity_num = Column(BigInteger, nullable=False)
    quantity_denom = Column(BigInteger, nullable=False)
    lot_guid = Column(String(32), nullable=True)


def initialize_schema(engine: Engine) -> None:
    """Create the accounts, transactions and splits tables if missing."""
    Base.metadata.create_all(engine)
