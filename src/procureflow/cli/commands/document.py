"""Document commands."""

import click
from procureflow.domain.document import DocumentService
from procureflow.domain.entities import DocumentType
from procureflow.domain.errors import DomainError
from procureflow.domain.finalization import FinalizationFailure, FinalizationService
from procureflow.cli.error_handling import handle_domain_error, handle_finalization_failure
from procureflow.utils.amount_parser import parse_amount
from procureflow.utils.date_parser import parse_date


@click.group()
def document_group():
    """Create, inspect and finalize invoices and RFQs."""
    pass


@document_group.command("create")
@click.option(
    "--type",
    "document_type",
    type=click.Choice([t.value for t in DocumentType], case_sensitive=False),
    required=True,
    help="Document type",
)
@click.option("--date", "date_str", required=True, help="Document date (YYYY-MM-DD or relative like 'today')")
@click.option("--owner", type=int, required=True, help="Owning user ID")
@click.option("--cost-center", type=int, required=True, help="Cost center ID")
@click.option("--sub-cost-center", type=int, help="Sub cost center ID")
@click.option("--account-code", type=int, required=True, help="Account code ID")
@click.option("--discount", default="0", help="Absolute discount (default: 0)")
@click.option("--vat", default="0", help="VAT rate in percent (default: 0)")
@click.pass_context
def create_document(
    ctx,
    document_type: str,
    date_str: str,
    owner: int,
    cost_center: int,
    sub_cost_center: int | None,
    account_code: int,
    discount: str,
    vat: str,
):
    """Create a draft document.

    Examples:
        procureflow document create --type invoice --date 2025-03-15 --owner 7 \\
            --cost-center 3 --account-code 12 --discount 20 --vat 15
    """
    db = ctx.obj["db"]
    service = DocumentService(db)

    try:
        document_id = service.create_document(
            document_type=document_type.lower(),
            document_date=parse_date(date_str),
            created_by=owner,
            cost_center_id=cost_center,
            sub_cost_center_id=sub_cost_center,
            account_code_id=account_code,
            discount_amount=parse_amount(discount),
            vat_rate=parse_amount(vat),
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created draft {document_type.lower()} (ID: {document_id})")


@document_group.command("add-item")
@click.argument("document_id", type=int)
@click.argument("quantity")
@click.argument("unit_price")
@click.option("--description", help="Item description")
@click.option("--tax-rate", help="VAT rate for this item, overriding the document rate")
@click.pass_context
def add_item(ctx, document_id: int, quantity: str, unit_price: str, description: str | None, tax_rate: str | None):
    """Add a line item to a draft document."""
    db = ctx.obj["db"]
    service = DocumentService(db)

    try:
        item_id = service.add_line_item(
            document_id=document_id,
            quantity=parse_amount(quantity),
            unit_price=parse_amount(unit_price),
            description=description,
            tax_rate=parse_amount(tax_rate) if tax_rate is not None else None,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added line item (ID: {item_id}) to document {document_id}")


@document_group.command("show")
@click.argument("document_id", type=int)
@click.pass_context
def show_document(ctx, document_id: int):
    """Show a document, its items and totals."""
    db = ctx.obj["db"]
    service = DocumentService(db)

    document = service.get_document(document_id)
    if document is None:
        click.echo(f"Error: Document {document_id} not found", err=True)
        ctx.exit(1)

    click.echo(f"\n{document.document_type.value.upper()} {document.id} ({document.status.value})")
    click.echo(f"Date: {document.document_date}  Owner: {document.created_by}")
    click.echo(f"Discount: {document.discount_amount}  VAT rate: {document.vat_rate}%")

    if not document.line_items:
        click.echo("No line items.")
        return

    for item in document.line_items:
        label = item.description or ""
        click.echo(f"  {item.position + 1}. {item.quantity} x {item.unit_price} = {item.subtotal} {label}".rstrip())

    if document.total is not None:
        click.echo(f"Subtotal: {document.subtotal}")
        click.echo(f"VAT: {document.vat_amount}")
        click.echo(f"Total: {document.total}")
        return

    try:
        totals = service.preview_totals(document_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Subtotal: {totals.subtotal} (preview)")
    click.echo(f"VAT: {totals.vat_amount} (preview)")
    click.echo(f"Total: {totals.total} (preview)")


@document_group.command("finalize")
@click.argument("document_id", type=int)
@click.option("--by", "submitted_by", type=int, required=True, help="Submitting user ID")
@click.option("--period", "period_id", type=int, help="Fiscal period ID, when the date falls in several")
@click.pass_context
def finalize_document(ctx, document_id: int, submitted_by: int, period_id: int | None):
    """Submit a draft document for approval."""
    db = ctx.obj["db"]
    settings = ctx.obj["settings"]
    service = FinalizationService(db, process_titles=settings.process_titles)

    outcome = service.finalize(document_id, submitted_by, fiscal_period_id=period_id)
    if isinstance(outcome, FinalizationFailure):
        handle_finalization_failure(ctx, outcome)

    click.echo(f"Document {document_id} submitted for approval")
    click.echo(f"  Fiscal period: {outcome.fiscal_period.name}")
    click.echo(f"  Total: {outcome.totals.total}")
    click.echo(f"  Approver: {outcome.approver_id} (task {outcome.task_id}, transaction {outcome.transaction_id})")


def register_commands(cli):
    """Register document commands with main CLI."""
    cli.add_command(document_group, name="document")
