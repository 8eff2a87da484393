"""gctool - inspect and edit GnuCash SQLite ledgers."""

__version__ = "0.1.0"
