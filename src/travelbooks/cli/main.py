"""Main CLI entry point."""

import click
from travelbooks.database.factories import create_sqlite_database
from travelbooks.domain.rates import RateService
from travelbooks.settings import Settings
from travelbooks.utils.logger import get_app_logger

# Import and register all commands at module level
from travelbooks.cli.commands import (
    agent,
    booking,
    client,
    inventory,
    rate,
    summary,
    transaction,
    treasury,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides TRAVELBOOKS_DB_PATH environment variable)",
    envvar="TRAVELBOOKS_DB_PATH",
)
@click.pass_context
def cli(ctx, db_path: str | None):
    """Travelbooks - Travel agency back-office ledger.

    Keep client and agent accounts, bookings with their costs and profit,
    receipts, supplier payments and treasuries, across several currencies.
    """
    ctx.ensure_object(dict)
    settings = Settings.from_env()
    ctx.obj["settings"] = settings
    get_app_logger(settings)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["rates"] = RateService(db).load_table()


# Register all commands
client.register_commands(cli)
agent.register_commands(cli)
booking.register_commands(cli)
transaction.register_commands(cli)
treasury.register_commands(cli)
rate.register_commands(cli)
inventory.register_commands(cli)
summary.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
