"""Inventory commands."""

import click

from travelbooks.cli.amounts import parse_money_or_exit
from travelbooks.cli.output import CURRENCY_CHOICE, format_money
from travelbooks.domain.entities import BASE_CURRENCY, ServiceType
from travelbooks.domain.inventory import InventoryService
from travelbooks.utils.date_parser import parse_optional_date


@click.group()
def inventory_group():
    """Manage prepaid stock (hotel allotments, seats, visas)."""
    pass


@inventory_group.command("add")
@click.argument("name", metavar="ITEM_NAME")
@click.option(
    "--type",
    "service_type",
    type=click.Choice([t.value for t in ServiceType], case_sensitive=False),
    required=True,
)
@click.option("--quantity", type=int, required=True, help="Units bought (rooms for hotels)")
@click.option("--cost", required=True, help="Unit cost price")
@click.option("--price", default="0", help="Unit selling price")
@click.option("--currency", type=CURRENCY_CHOICE, default=BASE_CURRENCY.value)
@click.option("--supplier", help="Supplier name")
@click.option("--description", help="Description")
@click.option("--expiry", help="Expiry date")
@click.pass_context
def add_item(
    ctx,
    name: str,
    service_type: str,
    quantity: int,
    cost: str,
    price: str,
    currency: str,
    supplier: str | None,
    description: str | None,
    expiry: str | None,
):
    """Add an inventory item.

    Examples:
        travelbooks inventory add "Hilton Dead Sea allotment" --type hotel --quantity 10 --cost 60
    """
    cost_price, _ = parse_money_or_exit(ctx, cost)
    selling_price, _ = parse_money_or_exit(ctx, price)
    try:
        item_id = InventoryService(ctx.obj["db"]).create_item(
            name=name,
            service_type=ServiceType(service_type.lower()),
            total_quantity=quantity,
            cost_price=cost_price,
            selling_price=selling_price,
            currency=currency.upper(),
            supplier=supplier,
            description=description,
            expiry_date=parse_optional_date(expiry),
        )
        click.echo(f"Created inventory item '{name.strip()}' (ID: {item_id})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@inventory_group.command("list")
@click.pass_context
def list_items(ctx):
    """List inventory items with sold and remaining counts.

    Cancelled and voided bookings do not consume stock.
    """
    levels = InventoryService(ctx.obj["db"]).stock_levels()
    if not levels:
        click.echo("No inventory items found.")
        return

    click.echo("\nInventory:")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':>4} {'Name':<30} {'Type':<10} {'Cost':>14} {'Total':>6} {'Sold':>6} {'Left':>6}"
    )
    click.echo("-" * 100)
    for item, stock in levels:
        click.echo(
            f"{item.id:>4} {item.name[:30]:<30} {item.service_type.value:<10} "
            f"{format_money(item.cost_price, item.currency):>14} "
            f"{stock.total:>6} {stock.sold:>6} {stock.remaining:>6}"
        )


def register_commands(cli):
    """Register inventory commands with main CLI."""
    cli.add_command(inventory_group, name="inventory")
