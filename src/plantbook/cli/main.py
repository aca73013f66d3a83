"""Main CLI entry point."""

import click
from plantbook.database.factories import create_sqlite_database
from plantbook.logging_utils import configure_logging, log_level_from_env

# Import and register all commands at module level
from plantbook.cli.commands import (
    equipment,
    category,
    record,
    production,
    summary,
    profit,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides PLANTBOOK_DB_PATH environment variable)",
    envvar="PLANTBOOK_DB_PATH",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Log debug output to stderr (or set PLANTBOOK_LOG_LEVEL)",
)
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Plantbook - crusher plant bookkeeping.

    Record equipment, material and salary costs, daily crusher production and
    monthly sales, then summarize expenses and split the monthly profit
    between the partners.
    """
    ctx.ensure_object(dict)

    if verbose:
        configure_logging("DEBUG")
    elif log_level_from_env():
        configure_logging()

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
equipment.register_commands(cli)
category.register_commands(cli)
record.register_commands(cli)
production.register_commands(cli)
summary.register_commands(cli)
profit.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
