"""Main CLI entry point."""

import logging

import click

from gctool import __version__
from gctool.cli.error_handling import handle_domain_error
from gctool.config import CONFIG_ENV_VAR, DB_PATH_ENV_VAR, load_config
from gctool.database.factories import create_sqlite_engine
from gctool.domain.errors import DomainError

# Import and register all commands at module level
from gctool.cli.commands import account, transaction


@click.group()
@click.version_option(version=__version__, prog_name="gctool")
@click.option(
    "--db-path",
    type=click.Path(dir_okay=False),
    help="Path to the GnuCash SQLite file (overrides the config file)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option(
    "--config-file",
    type=click.Path(dir_okay=False),
    help="JSON config file (default: ~/.gctool.json)",
    envvar=CONFIG_ENV_VAR,
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, config_file: str | None, debug: bool):
    """gctool - Inspect and edit a GnuCash SQLite ledger.

    Accounts can be given by guid or by their full path,
    e.g. "expenses:automotive:petrol" (case-insensitive).
    """
    ctx.ensure_object(dict)
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    # Open the ledger only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            config = load_config(config_file=config_file, db_path=db_path)
            engine = create_sqlite_engine(config.gnucash_db_file, timeout=config.timeout)
        except DomainError as e:
            handle_domain_error(ctx, e)
        ctx.obj["config"] = config
        ctx.obj["engine"] = engine
        ctx.call_on_close(engine.dispose)


# Register all commands
account.register_commands(cli)
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
