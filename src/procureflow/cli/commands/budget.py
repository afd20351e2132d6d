"""Budget commands."""

import click
from procureflow.domain.budget import BudgetService
from procureflow.domain.entities import BudgetStatus
from procureflow.domain.errors import DomainError
from procureflow.cli.error_handling import handle_domain_error
from procureflow.utils.amount_parser import parse_amount


@click.group()
def budget_group():
    """Manage budget allocations."""
    pass


@budget_group.command("add")
@click.argument("period_id", type=int)
@click.argument("cost_center_id", type=int)
@click.argument("account_code_id", type=int)
@click.option("--sub-cost-center", type=int, help="Sub cost center ID")
@click.option("--amount", required=True, help="Allocated amount")
@click.option(
    "--status",
    type=click.Choice([s.value for s in BudgetStatus], case_sensitive=False),
    default=BudgetStatus.ACTIVE.value,
    help="Budget status (default: Active)",
)
@click.pass_context
def add_budget(
    ctx,
    period_id: int,
    cost_center_id: int,
    account_code_id: int,
    sub_cost_center: int | None,
    amount: str,
    status: str,
):
    """Set up a budget for a fiscal period, cost center and account code."""
    db = ctx.obj["db"]
    service = BudgetService(db)

    try:
        allocation_id = service.create_allocation(
            fiscal_period_id=period_id,
            cost_center_id=cost_center_id,
            account_code_id=account_code_id,
            allocated_amount=parse_amount(amount),
            sub_cost_center_id=sub_cost_center,
            status=status.capitalize(),
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created budget allocation (ID: {allocation_id})")


@budget_group.command("check")
@click.argument("period_id", type=int)
@click.argument("cost_center_id", type=int)
@click.argument("account_code_id", type=int)
@click.option("--sub-cost-center", type=int, help="Sub cost center ID")
@click.pass_context
def check_budget(ctx, period_id: int, cost_center_id: int, account_code_id: int, sub_cost_center: int | None):
    """Check whether a usable budget exists for a coordinate."""
    db = ctx.obj["db"]
    service = BudgetService(db)

    check = service.validate(period_id, cost_center_id, sub_cost_center, account_code_id)
    if not check.ok:
        click.echo(f"Budget unavailable: {check.reason}", err=True)
        ctx.exit(1)
    click.echo(f"Budget available (allocation {check.allocation.id}, {check.allocation.allocated_amount} allocated)")


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
