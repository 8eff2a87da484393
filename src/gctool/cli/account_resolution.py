"""CLI helper turning an account argument into an Account."""

import click

from gctool.cli.error_handling import handle_domain_error
from gctool.domain.entities import Account
from gctool.domain.errors import DomainError
from gctool.domain.transaction import TransactionService


def resolve_account_or_exit(
    ctx: click.Context, service: TransactionService, guid_or_path: str
) -> Account:
    """Look up ``guid_or_path`` on a read connection.

    Exits with status 1 and an ``Error:`` line when nothing matches.
    """
    try:
        return service.resolve_account(guid_or_path)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
