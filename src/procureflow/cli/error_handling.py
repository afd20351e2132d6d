"""CLI error handling helpers."""

import click

from procureflow.domain.errors import DomainError
from procureflow.domain.finalization import FinalizationFailure

# Exit code for failures only an administrator can fix
CONFIGURATION_EXIT_CODE = 2


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_finalization_failure(ctx: click.Context, failure: FinalizationFailure) -> None:
    """Render a finalization failure and exit.

    Configuration failures exit with a distinct code and direct the user to
    an administrator; everything else exits 1.
    """
    click.echo(f"Error: {failure.user_message()}", err=True)
    for period in failure.candidates:
        click.echo(
            f"  {period.id}: {period.name} ({period.start_date} to {period.end_date})",
            err=True,
        )
    if failure.candidates:
        click.echo("Resubmit with --period ID to choose one.", err=True)
    ctx.exit(CONFIGURATION_EXIT_CODE if failure.is_configuration_error else 1)
