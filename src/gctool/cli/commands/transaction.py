"""Transaction commands."""

import click

from gctool.cli.account_resolution import resolve_account_or_exit
from gctool.cli.date_filters import resolve_cli_date_range
from gctool.cli.error_handling import handle_domain_error
from gctool.cli.render import output_option, render
from gctool.domain.errors import DomainError
from gctool.domain.transaction import (
    DEFAULT_LIMIT,
    TransactionService,
    build_transaction_query,
)


@click.group()
def transaction_group():
    """Inspect transactions and move splits between accounts."""
    pass


@transaction_group.command("get")
@click.argument("guid")
@output_option
@click.pass_context
def get_transaction(ctx, guid: str, output: str):
    """Show one transaction with its splits."""
    service = TransactionService(ctx.obj["engine"])
    try:
        render(service.get_transaction(guid), output)
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("list")
@click.option("--account", help="Only transactions touching this account (guid or path)")
@click.option("--start-date", help="Posted on or after (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="Posted on or before (YYYY-MM-DD or relative like 'today')")
@click.option("--description-like", help="SQL LIKE pattern on the description")
@click.option(
    "--limit", type=click.IntRange(min=1), default=DEFAULT_LIMIT, show_default=True,
    help="Maximum number of transactions",
)
@click.option("--page", type=click.IntRange(min=1), help="Page number")
@output_option
@click.pass_context
def list_transactions(
    ctx,
    account: str | None,
    start_date: str | None,
    end_date: str | None,
    description_like: str | None,
    limit: int,
    page: int | None,
    output: str,
):
    """List the newest transactions, each with all of its splits."""
    service = TransactionService(ctx.obj["engine"])
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)
    account_obj = resolve_account_or_exit(ctx, service, account) if account else None

    query = build_transaction_query(
        account=account_obj, start_date=start, end_date=end, description_like=description_like
    )
    try:
        transactions = service.list_transactions(query, limit=limit, page=page)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions and output == "table":
        click.echo("No transactions found.")
        return
    render(transactions, output)


@transaction_group.command("update")
@click.argument("guid")
@click.option("--source-account", required=True, help="Account to move splits from (guid or path)")
@click.option("--destination-account", required=True, help="Account to move splits to (guid or path)")
@output_option
@click.pass_context
def update_transaction(ctx, guid: str, source_account: str, destination_account: str, output: str):
    """Move a transaction's splits from one account to another.

    Examples:
        gctool transaction update 3f2a... --source-account expenses:misc \\
            --destination-account expenses:automotive:petrol
    """
    service = TransactionService(ctx.obj["engine"])
    source = resolve_account_or_exit(ctx, service, source_account)
    destination = resolve_account_or_exit(ctx, service, destination_account)

    try:
        transaction = service.reassign_splits(guid, source, destination)
    except DomainError as e:
        handle_domain_error(ctx, e)
    render(transaction, output)


@transaction_group.command("bulk-update")
@click.option("--source-account", required=True, help="Account to move splits from (guid or path)")
@click.option("--destination-account", required=True, help="Account to move splits to (guid or path)")
@click.option("--description-like", help="SQL LIKE pattern on the description")
@click.option("--start-date", help="Posted on or after (YYYY-MM-DD or relative)")
@click.option("--end-date", help="Posted on or before (YYYY-MM-DD or relative)")
@output_option
@click.pass_context
def bulk_update_transactions(
    ctx,
    source_account: str,
    destination_account: str,
    description_like: str | None,
    start_date: str | None,
    end_date: str | None,
    output: str,
):
    """Move splits of every matching transaction to another account.

    All splits are moved in one database transaction; if any update fails
    none of them are applied.

    Examples:
        gctool transaction bulk-update --description-like '%SHELL%' \\
            --source-account expenses:misc --destination-account expenses:automotive:petrol
    """
    service = TransactionService(ctx.obj["engine"])
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)
    source = resolve_account_or_exit(ctx, service, source_account)
    destination = resolve_account_or_exit(ctx, service, destination_account)

    query = build_transaction_query(
        start_date=start, end_date=end, description_like=description_like
    )
    try:
        transactions = service.bulk_reassign_splits(query, source, destination)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if output == "table":
        click.echo(f"Updated {len(transactions)} transaction(s)")
        if not transactions:
            return
    render(transactions, output)


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
