"""Booking management commands."""

import click

from travelbooks.cli.amounts import parse_money_or_exit
from travelbooks.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from travelbooks.cli.output import CURRENCY_CHOICE, format_money
from travelbooks.cli.resolution import resolve_treasury_or_exit
from travelbooks.domain.booking import BookingService
from travelbooks.domain.calculator import effective_quantity
from travelbooks.domain.entities import BASE_CURRENCY, BookingStatus
from travelbooks.domain.treasury import TreasuryService
from travelbooks.utils.date_parser import parse_date, parse_optional_date
from travelbooks.utils.service_parser import parse_service_line

STATUS_CHOICE = click.Choice([s.value for s in BookingStatus], case_sensitive=False)


@click.group()
def booking_group():
    """Manage bookings, their services and payments."""
    pass


@booking_group.command("create")
@click.argument("client", metavar="CLIENT_NAME")
@click.option("--sales", required=True, help="Sales total charged to the client (e.g. 200 or '280 USD')")
@click.option("--currency", type=CURRENCY_CHOICE, help="Currency of the sales total (default: display currency)")
@click.option(
    "--service",
    "services",
    multiple=True,
    help="Service line as key=value pairs, e.g. 'type=visa,qty=2,cost=50 USD,supplier=Petra Tours'",
)
@click.option("--date", "date_str", default="today", help="Booking date (default: today)")
@click.option("--destination", default="", help="Destination")
@click.option("--type", "booking_type", default="General", help="Booking type (Tourism, Umrah, Flight...)")
@click.option("--status", type=STATUS_CHOICE, default=BookingStatus.CONFIRMED.value)
@click.option("--file-no", help="File number printed on documents")
@click.option("--notes", help="Notes")
@click.pass_context
def create_booking(
    ctx,
    client: str,
    sales: str,
    currency: str | None,
    services: tuple[str, ...],
    date_str: str,
    destination: str,
    booking_type: str,
    status: str,
    file_no: str | None,
    notes: str | None,
):
    """Create a booking.

    Each --service adds one line. Hotel lines take check-in, check-out and
    rooms; their quantity is rooms times nights.

    Examples:
        travelbooks booking create "Ahmad Saleh" --sales 200 \\
            --service "type=visa,qty=2,cost=50 USD"
        travelbooks booking create "Blue Sky Co" --sales "900 USD" \\
            --service "type=hotel,cost=40,rooms=2,check-in=2024-01-01,check-out=2024-01-04"
    """
    settings = ctx.obj["settings"]
    amount, sales_currency = parse_money_or_exit(
        ctx, sales, currency, default=settings.display_currency
    )

    try:
        booking_date = parse_date(date_str)
        lines = [parse_service_line(text) for text in services]
        service = BookingService(ctx.obj["db"], rates=ctx.obj["rates"])
        booking_id = service.create_booking(
            client_name=client,
            date=booking_date,
            services=lines,
            sales_total=amount,
            display_currency=sales_currency,
            destination=destination,
            booking_type=booking_type,
            status=BookingStatus(status.lower()),
            file_no=file_no,
            notes=notes,
        )
        booking = service.require_booking(booking_id)
        click.echo(f"Created booking {booking_id} for '{booking.client_name}'")
        click.echo(
            f"Sales: {format_money(booking.amount, BASE_CURRENCY)} | "
            f"Cost: {format_money(booking.cost, BASE_CURRENCY)} | "
            f"Profit: {format_money(booking.profit, BASE_CURRENCY)}"
        )
        if booking.client_id is None:
            click.echo(f"Note: no client named '{booking.client_name}' exists; the booking is not linked")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@booking_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option("--status", type=STATUS_CHOICE, help="Only bookings with this status")
@click.option("--client", help="Only bookings for this client name")
@click.pass_context
def list_bookings(ctx, start_date, end_date, status, client, **periods):
    """List bookings with optional filters."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags_from(periods)
    )
    service = BookingService(ctx.obj["db"], rates=ctx.obj["rates"])
    bookings = service.list_bookings(
        start_date=start,
        end_date=end,
        status=BookingStatus(status.lower()) if status else None,
        client_name=client,
    )

    if not bookings:
        click.echo("No bookings found.")
        return

    click.echo(f"\nFound {len(bookings)} booking(s):")
    click.echo("-" * 120)
    click.echo(
        f"{'ID':>4} {'Date':<12} {'File':<10} {'Client':<24} {'Status':<11} "
        f"{'Sales':>12} {'Cost':>12} {'Profit':>12} {'Paid':>12} {'Payment':<8}"
    )
    click.echo("-" * 120)
    for b in bookings:
        client_name = b.client_name if len(b.client_name) <= 24 else b.client_name[:21] + "..."
        click.echo(
            f"{b.id:>4} {b.date.isoformat():<12} {b.reference:<10} {client_name:<24} "
            f"{b.status.value:<11} {format_money(b.amount):>12} {format_money(b.cost):>12} "
            f"{format_money(b.profit):>12} {format_money(b.paid_amount):>12} {b.payment_status.value:<8}"
        )


@booking_group.command("show")
@click.argument("booking_id", type=int)
@click.pass_context
def show_booking(ctx, booking_id: int):
    """Show a booking with its service lines and payments."""
    service = BookingService(ctx.obj["db"], rates=ctx.obj["rates"])
    try:
        booking = service.require_booking(booking_id)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo(f"\nBooking ID: {booking.id} (file {booking.reference})")
    click.echo(f"  Client: {booking.client_name}" + (f" (ID: {booking.client_id})" if booking.client_id else ""))
    click.echo(f"  Date: {booking.date}")
    if booking.destination:
        click.echo(f"  Destination: {booking.destination}")
    click.echo(f"  Type: {booking.booking_type}")
    click.echo(f"  Status: {booking.status.value}")
    click.echo(f"  Sales: {format_money(booking.amount, BASE_CURRENCY)}")
    click.echo(f"  Cost: {format_money(booking.cost, BASE_CURRENCY)}")
    click.echo(f"  Profit: {format_money(booking.profit, BASE_CURRENCY)}")
    click.echo(f"  Paid: {format_money(booking.paid_amount, BASE_CURRENCY)} ({booking.payment_status.value})")
    if booking.notes:
        click.echo(f"  Notes: {booking.notes}")

    if booking.services:
        click.echo("\n  Services:")
        for line in booking.services:
            supplier = f" from {line.supplier}" if line.supplier else ""
            stay = ""
            if line.check_in is not None:
                stay = f" [{line.check_in} -> {line.check_out}, {line.room_count} room(s)]"
            click.echo(
                f"    - {line.service_type.value} x{effective_quantity(line)} @ "
                f"{format_money(line.cost_price, line.cost_currency)}{supplier}{stay}"
            )

    if booking.payments:
        click.echo("\n  Payments:")
        for p in booking.payments:
            click.echo(
                f"    - #{p.id} {p.date}: {format_money(p.amount, p.currency)} "
                f"@ {p.exchange_rate} = {format_money(p.final_amount, BASE_CURRENCY)}"
            )


@booking_group.command("status")
@click.argument("booking_id", type=int)
@click.argument("status", type=STATUS_CHOICE)
@click.pass_context
def set_status(ctx, booking_id: int, status: str):
    """Change a booking's status.

    Cancelled and voided bookings no longer count toward client or agent
    balances.
    """
    service = BookingService(ctx.obj["db"], rates=ctx.obj["rates"])
    try:
        service.update_status(booking_id, BookingStatus(status.lower()))
        click.echo(f"Booking {booking_id} is now {status.lower()}")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@booking_group.command("pay")
@click.argument("booking_id", type=int)
@click.argument("amount", metavar="AMOUNT")
@click.option("--currency", type=CURRENCY_CHOICE, help="Currency of AMOUNT (default: base currency)")
@click.option("--rate", help="Exchange rate to use instead of the current table rate")
@click.option("--treasury", help="Treasury name or ID receiving the money")
@click.option("--date", "date_str", help="Payment date (default: today)")
@click.option("--notes", help="Notes")
@click.pass_context
def pay_booking(
    ctx,
    booking_id: int,
    amount: str,
    currency: str | None,
    rate: str | None,
    treasury: str | None,
    date_str: str | None,
    notes: str | None,
):
    """Apply a client payment to a booking.

    Examples:
        travelbooks booking pay 12 100 --treasury "Main Cash"
        travelbooks booking pay 12 "141 USD" --rate 1.41
    """
    db = ctx.obj["db"]
    treasury_id = resolve_treasury_or_exit(ctx, TreasuryService(db), treasury)
    value, paid_in = parse_money_or_exit(ctx, amount, currency)

    try:
        service = BookingService(db, rates=ctx.obj["rates"])
        payment_id = service.add_payment(
            booking_id,
            value,
            currency=paid_in,
            date=parse_optional_date(date_str),
            treasury_id=treasury_id,
            exchange_rate=rate,
            notes=notes,
        )
        booking = service.require_booking(booking_id)
        click.echo(f"Recorded payment {payment_id} on booking {booking_id}")
        click.echo(
            f"Paid: {format_money(booking.paid_amount, BASE_CURRENCY)} of "
            f"{format_money(booking.amount, BASE_CURRENCY)} ({booking.payment_status.value})"
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@booking_group.command("delete")
@click.argument("booking_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_booking(ctx, booking_id: int, yes: bool):
    """Delete a booking that has no payments."""
    service = BookingService(ctx.obj["db"], rates=ctx.obj["rates"])
    try:
        booking = service.require_booking(booking_id)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete booking {booking_id} for '{booking.client_name}'?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_booking(booking_id)
        click.echo(f"Deleted booking {booking_id}")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register booking commands with main CLI."""
    cli.add_command(booking_group, name="booking")
