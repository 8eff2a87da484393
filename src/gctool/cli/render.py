"""Output rendering for CLI commands."""

import json
from dataclasses import asdict
from decimal import Decimal
from typing import Any, Sequence

import click

from gctool.domain.entities import Account, Split, Transaction

OUTPUT_FORMATS = ("table", "json")

output_option = click.option(
    "--output",
    "-o",
    type=click.Choice(OUTPUT_FORMATS),
    default="table",
    show_default=True,
    help="Output format",
)


def _decimal_places(denom: int) -> int:
    """Digits after the point for a power-of-ten denominator, else 2."""
    places = 0
    while denom % 10 == 0:
        denom //= 10
        places += 1
    return places if denom == 1 else 2


def format_amount(num: int, denom: int) -> tuple[str, str]:
    """Split a rational value into (debit, credit) display strings.

    The sign of ``num`` picks the column; ``denom`` sets the precision.
    """
    if denom == 0 or num == 0:
        return "", ""
    exponent = Decimal(1).scaleb(-_decimal_places(abs(denom)))
    amount = str((Decimal(num) / Decimal(denom)).quantize(exponent))
    if num < 0:
        return "", amount
    return amount, ""


def to_json(data: Any) -> str:
    """Serialize entities (or lists of them) as indented JSON."""
    if isinstance(data, (list, tuple)):
        payload = [asdict(item) for item in data]
    else:
        payload = asdict(data)
    return json.dumps(payload, indent=4, default=str)


def _split_line(split: Split) -> str:
    account_name = split.account.full_name if split.account is not None else split.account_guid
    debit, credit = format_amount(split.value_num, split.value_denom)
    return f"    {account_name:40s} {debit:>12s} {credit:>12s}"


def render_transactions(transactions: Sequence[Transaction]) -> None:
    """Print transactions with one indented line per split."""
    click.echo(f"{'Date':10s} | Description")
    click.echo("-" * 80)
    for transaction in transactions:
        post_date = transaction.post_date.strftime("%Y-%m-%d") if transaction.post_date else ""
        click.echo(f"{post_date:10s} | {transaction.description or ''}")
        for split in transaction.splits:
            click.echo(_split_line(split))
        click.echo("")


def render_accounts(accounts: Sequence[Account]) -> None:
    """Print one line per account."""
    click.echo(f"{'GUID':32s} | {'Type':10s} | Account")
    click.echo("-" * 80)
    for account in accounts:
        click.echo(f"{account.guid:32s} | {account.account_type:10s} | {account.full_name}")


def render(data: Any, output: str) -> None:
    """Render an entity or list of entities in the requested format."""
    if output == "json":
        click.echo(to_json(data))
        return

    items = data if isinstance(data, (list, tuple)) else [data]
    if items and isinstance(items[0], Account):
        render_accounts(items)
    else:
        render_transactions(items)
