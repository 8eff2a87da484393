"""Domain layer for gctool."""

from gctool.domain.account import AccountService
from gctool.domain.transaction import TransactionService

__all__ = ["AccountService", "TransactionService"]
