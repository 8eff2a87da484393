"""Account commands."""

import click

from gctool.cli.error_handling import handle_domain_error
from gctool.cli.render import output_option, render
from gctool.domain.account import AccountService
from gctool.domain.errors import DomainError


@click.group()
def account_group():
    """Inspect and edit accounts."""
    pass


@account_group.command("get")
@click.argument("account", metavar="GUID_OR_PATH")
@output_option
@click.pass_context
def get_account(ctx, account: str, output: str):
    """Show one account.

    Examples:
        gctool account get 0b1c2d...
        gctool account get expenses:automotive:petrol
    """
    service = AccountService(ctx.obj["engine"])
    try:
        render(service.get_account(account), output)
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.option("--name-like", help="SQL LIKE pattern on the account name (e.g. '%Petrol%')")
@click.option("--type", "account_type", help="Account type (e.g. EXPENSE, BANK)")
@click.option("--limit", type=click.IntRange(min=1), help="Maximum number of accounts")
@click.option("--page", type=click.IntRange(min=1), help="Page number (requires --limit)")
@output_option
@click.pass_context
def list_accounts(
    ctx, name_like: str | None, account_type: str | None, limit: int | None, page: int | None, output: str
):
    """List accounts ordered by name."""
    if page is not None and limit is None:
        click.echo("Error: --page requires --limit", err=True)
        ctx.exit(1)

    service = AccountService(ctx.obj["engine"])
    try:
        accounts = service.list_accounts(
            name_like=name_like, account_type=account_type, limit=limit, page=page
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not accounts and output == "table":
        click.echo("No accounts found.")
        return
    render(accounts, output)


@account_group.command("update")
@click.argument("account", metavar="GUID_OR_PATH")
@click.option("--name", help="New account name")
@click.option("--description", help="New description (empty string clears it)")
@click.option("--code", help="New account code (empty string clears it)")
@click.option("--parent", help="Guid or path of the new parent account")
@click.option("--hidden/--visible", default=None, help="Hide or show the account")
@click.option("--placeholder/--no-placeholder", default=None, help="Mark as placeholder")
@output_option
@click.pass_context
def update_account(
    ctx,
    account: str,
    name: str | None,
    description: str | None,
    code: str | None,
    parent: str | None,
    hidden: bool | None,
    placeholder: bool | None,
    output: str,
) -> None:
    """Update account metadata.

    Only the options given are changed. Renaming fails if the parent
    already has an account with that name.

    Examples:
        gctool account update expenses:automotive:petrol --name Fuel
        gctool account update expenses:fuel --parent expenses:travel
    """
    if all(v is None for v in (name, description, code, parent, hidden, placeholder)):
        click.echo("Error: Nothing to update", err=True)
        ctx.exit(1)

    service = AccountService(ctx.obj["engine"])
    try:
        updated = service.update_account(
            account,
            name=name,
            description=description,
            code=code,
            parent=parent,
            hidden=hidden,
            placeholder=placeholder,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    render(updated, output)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
