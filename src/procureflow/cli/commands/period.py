"""Fiscal period commands."""

import click
from procureflow.domain.errors import DomainError
from procureflow.domain.fiscal_period import FiscalPeriodService
from procureflow.cli.error_handling import handle_domain_error
from procureflow.utils.date_parser import parse_date


@click.group()
def period_group():
    """Manage fiscal periods."""
    pass


@period_group.command("add")
@click.argument("name")
@click.argument("start")
@click.argument("end")
@click.pass_context
def add_period(ctx, name: str, start: str, end: str):
    """Create a fiscal period covering START up to (not including) END."""
    db = ctx.obj["db"]
    service = FiscalPeriodService(db)

    try:
        period_id = service.create_period(name=name, start_date=parse_date(start), end_date=parse_date(end))
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created fiscal period '{name}' (ID: {period_id})")


@period_group.command("resolve")
@click.argument("date_str", metavar="DATE")
@click.pass_context
def resolve_periods(ctx, date_str: str):
    """List the fiscal periods containing DATE."""
    db = ctx.obj["db"]
    service = FiscalPeriodService(db)

    try:
        day = parse_date(date_str)
    except ValueError as e:
        handle_domain_error(ctx, e)

    periods = service.resolve_periods(day)
    if not periods:
        click.echo(f"No fiscal period contains {day}.")
        return

    if len(periods) > 1:
        click.echo(f"{day} falls in {len(periods)} fiscal periods; one must be selected:")
    for p in periods:
        click.echo(f"  {p.id}: {p.name} ({p.start_date} to {p.end_date})")


def register_commands(cli):
    """Register fiscal period commands with main CLI."""
    cli.add_command(period_group, name="period")
