"""Main CLI entry point."""

import getpass

import click
from moneytrack.database.factories import create_sqlite_database
from moneytrack.logging_config import setup_logging

# Import and register all commands at module level
from moneytrack.cli.commands import (
    account,
    add,
    transaction,
    category,
    init_categories,
    installment,
    summary,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides MONEYTRACK_DB_PATH environment variable)",
    envvar="MONEYTRACK_DB_PATH",
)
@click.option(
    "--user",
    "user_id",
    envvar="MONEYTRACK_USER",
    help="Current user id (defaults to MONEYTRACK_USER or the login name)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="MONEYTRACK_LOG_LEVEL",
    show_default=True,
    help="Logging level",
)
@click.option("--log-json", is_flag=True, help="Emit log records as JSON lines")
@click.pass_context
def cli(ctx, db_path: str | None, user_id: str | None, log_level: str, log_json: bool):
    """Moneytrack - personal finance tracker.

    Track account balances, installment plans and categorized income and
    expenses for one or more users.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level, json_format=log_json)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user_id"] = user_id or getpass.getuser()
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
category.register_commands(cli)
init_categories.register_commands(cli)
installment.register_commands(cli)
summary.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
