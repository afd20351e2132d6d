"""Approval process commands."""

import click
from procureflow.domain.approval import ApprovalProcessService, ApprovalRouter, RoutingFailure
from procureflow.domain.errors import DomainError
from procureflow.cli.error_handling import CONFIGURATION_EXIT_CODE, handle_domain_error


@click.group()
def process_group():
    """Manage approval processes, steps and approver assignments."""
    pass


@process_group.command("create")
@click.argument("title")
@click.pass_context
def create_process(ctx, title: str):
    """Create an approval process (e.g. "RFQ Approval")."""
    db = ctx.obj["db"]
    service = ApprovalProcessService(db)

    try:
        process_id = service.create_process(title)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created approval process '{title}' (ID: {process_id})")


@process_group.command("add-step")
@click.argument("title")
@click.argument("order", type=int)
@click.argument("description")
@click.pass_context
def add_step(ctx, title: str, order: int, description: str):
    """Add a step with ORDER and DESCRIPTION to the process TITLE."""
    db = ctx.obj["db"]
    service = ApprovalProcessService(db)

    try:
        step_id = service.add_step(title, order, description)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added step {order} '{description}' to '{title}' (ID: {step_id})")


@process_group.command("assign")
@click.argument("step_id", type=int)
@click.argument("requester_id", type=int)
@click.argument("approver_id", type=int)
@click.pass_context
def assign_approver(ctx, step_id: int, requester_id: int, approver_id: int):
    """Route REQUESTER_ID's documents to APPROVER_ID at STEP_ID."""
    db = ctx.obj["db"]
    service = ApprovalProcessService(db)

    try:
        service.assign_approver(step_id, requester_id, approver_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Requester {requester_id} is routed to approver {approver_id} at step {step_id}")


@process_group.command("show")
@click.argument("title")
@click.pass_context
def show_process(ctx, title: str):
    """Show the steps of an approval process."""
    db = ctx.obj["db"]
    service = ApprovalProcessService(db)

    process = service.get_process(title)
    if process is None:
        click.echo(f"Error: Approval process '{title}' not found", err=True)
        ctx.exit(1)

    click.echo(f"\n{process.title} (ID: {process.id})")
    if not process.steps:
        click.echo("  No steps configured.")
    for step in process.steps:
        click.echo(f"  {step.order}. {step.description} (step ID: {step.id})")


@process_group.command("route")
@click.argument("title")
@click.option("--requester", type=int, required=True, help="Requesting user ID")
@click.pass_context
def route(ctx, title: str, requester: int):
    """Show who approves REQUESTER's documents at the first step of TITLE."""
    db = ctx.obj["db"]
    router = ApprovalRouter(db)

    routing = router.resolve_approver(title, requester)
    if isinstance(routing, RoutingFailure):
        click.echo(f"Error: {routing.code.value}: {routing.reason}", err=True)
        ctx.exit(CONFIGURATION_EXIT_CODE)

    click.echo(
        f"Step {routing.step.order} '{routing.step.description}' -> approver {routing.approver_id}"
    )


def register_commands(cli):
    """Register approval process commands with main CLI."""
    cli.add_command(process_group, name="process")
