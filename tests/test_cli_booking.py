"""Tests for booking commands."""

from datetime import date

from travelbooks.cli.main import cli


def run(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def create(cli_runner, temp_db, client="Ahmad Saleh", *extra):
    return run(cli_runner, temp_db, "booking", "create", client, *extra)


def test_booking_create_with_services(cli_runner, temp_db, sample_client):
    """Test creating a booking prints its computed totals."""
    result = create(
        cli_runner,
        temp_db,
        "Ahmad Saleh",
        "--sales",
        "200",
        "--date",
        "2024-01-10",
        "--service",
        "type=visa,qty=2,cost=35.5",
        "--service",
        "type=hotel,cost=30,rooms=2,check-in=2024-01-10,check-out=2024-01-12",
    )

    assert result.exit_code == 0
    assert "Created booking 1 for 'Ahmad Saleh'" in result.output
    assert "Sales: 200.00 JOD | Cost: 191.00 JOD | Profit: 9.00 JOD" in result.output
    assert "Note:" not in result.output


def test_booking_create_unlinked_client(cli_runner, temp_db):
    result = create(cli_runner, temp_db, "Walk-in Guest", "--sales", "50")
    assert result.exit_code == 0
    assert "Note: no client named 'Walk-in Guest' exists" in result.output


def test_booking_create_sales_in_usd(cli_runner, temp_db):
    result = create(cli_runner, temp_db, "Walk-in", "--sales", "282 USD")
    assert result.exit_code == 0
    assert "Sales: 200.00 JOD" in result.output


def test_booking_create_currency_option_wins(cli_runner, temp_db):
    result = create(cli_runner, temp_db, "Walk-in", "--sales", "529", "--currency", "SAR")
    assert result.exit_code == 0
    assert "Sales: 100.00 JOD" in result.output


def test_booking_create_profit_can_be_negative(cli_runner, temp_db):
    result = create(cli_runner, temp_db, "Walk-in", "--sales", "50", "--service", "type=flight,cost=80")
    assert result.exit_code == 0
    assert "Profit: -30.00 JOD" in result.output


def test_booking_create_bad_service(cli_runner, temp_db):
    result = create(cli_runner, temp_db, "Walk-in", "--sales", "50", "--service", "type=spaceship")
    assert result.exit_code == 1
    assert "Error: Unknown service type 'spaceship'" in result.output


def test_booking_create_bad_date(cli_runner, temp_db):
    result = create(cli_runner, temp_db, "Walk-in", "--sales", "50", "--date", "someday")
    assert result.exit_code == 1
    assert "Could not parse date" in result.output


def test_booking_create_requires_sales(cli_runner, temp_db):
    result = create(cli_runner, temp_db, "Walk-in")
    assert result.exit_code != 0
    assert "--sales" in result.output


def test_booking_list_empty(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "booking", "list")
    assert result.exit_code == 0
    assert "No bookings found." in result.output


def test_booking_list_filters(cli_runner, temp_db):
    create(cli_runner, temp_db, "Basel", "--sales", "100", "--date", "2024-01-10")
    create(cli_runner, temp_db, "Omar", "--sales", "200", "--date", "2024-03-10", "--status", "pending")

    result = run(cli_runner, temp_db, "booking", "list")
    assert "Found 2 booking(s)" in result.output

    result = run(cli_runner, temp_db, "booking", "list", "--client", "Omar")
    assert "Found 1 booking(s)" in result.output
    assert "Basel" not in result.output

    result = run(cli_runner, temp_db, "booking", "list", "--status", "pending")
    assert "Omar" in result.output
    assert "Basel" not in result.output

    result = run(cli_runner, temp_db, "booking", "list", "--start-date", "2024-03-01", "--end-date", "2024-03-31")
    assert "Found 1 booking(s)" in result.output
    assert "Omar" in result.output


def test_booking_list_this_month(cli_runner, temp_db):
    create(cli_runner, temp_db, "Basel", "--sales", "100", "--date", "2020-01-10")
    create(cli_runner, temp_db, "Omar", "--sales", "100")

    result = run(cli_runner, temp_db, "booking", "list", "--this-month")
    assert result.exit_code == 0
    assert "Omar" in result.output
    assert "Basel" not in result.output


def test_booking_show(cli_runner, temp_db, sample_agent):
    create(
        cli_runner,
        temp_db,
        "Walk-in",
        "--sales",
        "150",
        "--date",
        "2024-01-10",
        "--destination",
        "Wadi Rum",
        "--file-no",
        "F-0007",
        "--service",
        "type=tour,qty=2,cost=50 USD,supplier=Petra Tours",
    )
    result = run(cli_runner, temp_db, "booking", "show", "1")
    assert result.exit_code == 0
    assert "Booking ID: 1 (file F-0007)" in result.output
    assert "Destination: Wadi Rum" in result.output
    assert "tour x2 @ 50.00 USD from Petra Tours" in result.output


def test_booking_show_not_found(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "booking", "show", "42")
    assert result.exit_code == 1
    assert "Error: Booking 42 not found" in result.output


def test_booking_status(cli_runner, temp_db, sample_client):
    """Test a cancelled booking stops billing the client."""
    create(cli_runner, temp_db, "Ahmad Saleh", "--sales", "100")
    result = run(cli_runner, temp_db, "booking", "status", "1", "cancelled")
    assert result.exit_code == 0
    assert "Booking 1 is now cancelled" in result.output

    result = run(cli_runner, temp_db, "client", "balance", "Ahmad Saleh")
    assert "Ahmad Saleh: 0.00 JOD" in result.output


def test_booking_status_invalid(cli_runner, temp_db):
    create(cli_runner, temp_db, "Walk-in", "--sales", "100")
    result = run(cli_runner, temp_db, "booking", "status", "1", "lost")
    assert result.exit_code != 0


def test_booking_pay(cli_runner, temp_db, sample_client, sample_treasury):
    """Test a payment updates the booking and the client balance."""
    create(cli_runner, temp_db, "Ahmad Saleh", "--sales", "200")
    result = run(cli_runner, temp_db, "booking", "pay", "1", "80", "--treasury", "Main Cash")
    assert result.exit_code == 0
    assert "Recorded payment 1 on booking 1" in result.output
    assert "Paid: 80.00 JOD of 200.00 JOD (partial)" in result.output

    result = run(cli_runner, temp_db, "client", "balance", "Ahmad Saleh")
    assert "Ahmad Saleh: 120.00 JOD" in result.output

    result = run(cli_runner, temp_db, "transaction", "list", "--category", "Booking Receipts")
    assert "Booking payment from Ahmad Saleh - file 1" in result.output


def test_booking_pay_with_rate(cli_runner, temp_db):
    create(cli_runner, temp_db, "Walk-in", "--sales", "100")
    result = run(cli_runner, temp_db, "booking", "pay", "1", "150 USD", "--rate", "1.5")
    assert result.exit_code == 0
    assert "Paid: 100.00 JOD of 100.00 JOD (paid)" in result.output


def test_booking_pay_invalid_rate(cli_runner, temp_db):
    create(cli_runner, temp_db, "Walk-in", "--sales", "100")
    result = run(cli_runner, temp_db, "booking", "pay", "1", "150 USD", "--rate", "-1")
    assert result.exit_code == 1
    assert "must be positive" in result.output


def test_booking_pay_missing_booking(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "booking", "pay", "9", "10")
    assert result.exit_code == 1
    assert "Booking 9 not found" in result.output


def test_booking_delete(cli_runner, temp_db):
    create(cli_runner, temp_db, "Walk-in", "--sales", "100")
    result = run(cli_runner, temp_db, "booking", "delete", "1", "--yes")
    assert result.exit_code == 0
    assert "Deleted booking 1" in result.output


def test_booking_delete_with_payment_blocked(cli_runner, temp_db):
    create(cli_runner, temp_db, "Walk-in", "--sales", "100")
    run(cli_runner, temp_db, "booking", "pay", "1", "10")
    result = run(cli_runner, temp_db, "booking", "delete", "1", "--yes")
    assert result.exit_code == 1
    assert "Cannot delete booking 1" in result.output


def test_booking_default_date_is_today(cli_runner, temp_db):
    create(cli_runner, temp_db, "Walk-in", "--sales", "100")
    result = run(cli_runner, temp_db, "booking", "show", "1")
    assert f"Date: {date.today()}" in result.output
