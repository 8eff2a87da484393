"""Utility functions for gctool."""

from gctool.utils.date_parser import parse_date
from gctool.utils.account_resolver import resolve_account

__all__ = ["parse_date", "resolve_account"]
