"""Totals preview command."""

import click
from procureflow.domain.entities import LineItem
from procureflow.domain.errors import DomainError
from procureflow.domain.money import compute_totals, distribute_discount, rounding_difference
from procureflow.cli.error_handling import handle_domain_error
from procureflow.utils.amount_parser import parse_amount, parse_line_item


@click.command("totals")
@click.option(
    "--item",
    "items",
    multiple=True,
    required=True,
    help="Line item as QUANTITYxPRICE (e.g., 2x100); repeat for more items",
)
@click.option("--discount", default="0", help="Absolute discount for the document (default: 0)")
@click.option("--vat", default="0", help="VAT rate in percent (default: 0)")
@click.pass_context
def preview_totals(ctx, items: tuple[str, ...], discount: str, vat: str):
    """Preview document totals without saving anything.

    Examples:
        procureflow totals --item 2x100 --item 1x50 --discount 20 --vat 15
    """
    try:
        line_items = []
        for position, item in enumerate(items):
            quantity, unit_price = parse_line_item(item)
            line_items.append(LineItem(quantity=quantity, unit_price=unit_price, position=position))
        discount_amount = parse_amount(discount)
        vat_rate = parse_amount(vat)

        totals = compute_totals(line_items, discount_amount, vat_rate)
        breakdown = distribute_discount(line_items, discount_amount, vat_rate)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{'#':<4} {'Qty':>10} {'Price':>12} {'Subtotal':>12} {'Discount':>10} {'VAT':>10} {'Total':>12}")
    click.echo("-" * 76)
    for position, (line, item) in enumerate(zip(line_items, breakdown), start=1):
        click.echo(
            f"{position:<4} {line.quantity:>10} {line.unit_price:>12} {item.subtotal:>12} "
            f"{item.discount_share:>10} {item.vat_amount:>10} {item.total:>12}"
        )
    click.echo("-" * 76)
    click.echo(f"Subtotal:            {totals.subtotal:>12}")
    click.echo(f"Discount:            {totals.discount_amount:>12}")
    click.echo(f"Discounted subtotal: {totals.discounted_subtotal:>12}")
    click.echo(f"VAT:                 {totals.vat_amount:>12}")
    click.echo(f"Total:               {totals.total:>12}")

    difference = rounding_difference(totals, breakdown)
    if difference:
        click.echo(f"Note: item totals differ from the document total by {difference} due to rounding.")


def register_commands(cli):
    """Register totals command with main CLI."""
    cli.add_command(preview_totals)
