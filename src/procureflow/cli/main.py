"""Main CLI entry point."""

import click
from procureflow.config import Settings
from procureflow.database.factories import create_sqlite_database
from procureflow.utils.logging import configure_logging

# Import and register all commands at module level
from procureflow.cli.commands import (
    totals,
    period,
    budget,
    process,
    document,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides PROCUREFLOW_DB_PATH environment variable)",
    envvar="PROCUREFLOW_DB_PATH",
)
@click.option(
    "--log-level",
    help="Log level, e.g. INFO or DEBUG (overrides PROCUREFLOW_LOG_LEVEL)",
    envvar="PROCUREFLOW_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Procureflow - procurement document finalization.

    Compute document totals, resolve fiscal periods, check budgets and route
    invoices and RFQs to their first approver.
    """
    ctx.ensure_object(dict)
    settings = Settings.from_env()

    level = log_level or settings.log_level
    if level:
        try:
            configure_logging(level)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--log-level")

    ctx.obj["settings"] = settings

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(db_path or settings.database_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
totals.register_commands(cli)
period.register_commands(cli)
budget.register_commands(cli)
process.register_commands(cli)
document.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
