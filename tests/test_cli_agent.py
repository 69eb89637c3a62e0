"""Tests for agent commands."""

from travelbooks.cli.main import cli


def run(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_agent_create(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "agent", "create", "Gulf Hotels", "--type", "Hotel")
    assert result.exit_code == 0
    assert "Created agent 'Gulf Hotels'" in result.output


def test_agent_create_in_sar(cli_runner, temp_db):
    """Test a SAR opening balance is stored in JOD."""
    result = run(
        cli_runner, temp_db, "agent", "create", "Gulf Hotels", "--currency", "SAR", "--opening-balance", "529"
    )
    assert result.exit_code == 0

    result = run(cli_runner, temp_db, "agent", "show", "Gulf Hotels")
    assert "Currency: SAR" in result.output
    assert "Opening balance: 100.00" in result.output


def test_agent_list_empty(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "agent", "list")
    assert result.exit_code == 0
    assert "No agents found" in result.output


def test_agent_balance_from_services(cli_runner, temp_db, sample_agent):
    """Test booking a service from an agent raises what is owed to it."""
    result = run(
        cli_runner,
        temp_db,
        "booking",
        "create",
        "Walk-in",
        "--sales",
        "300",
        "--date",
        "2024-02-01",
        "--service",
        "type=hotel,cost=141 USD,rooms=1,check-in=2024-02-01,check-out=2024-02-03,supplier=Petra Tours",
    )
    assert result.exit_code == 0

    result = run(cli_runner, temp_db, "agent", "balance", "Petra Tours")
    assert result.exit_code == 0
    assert "Petra Tours: 200.00 JOD" in result.output


def test_agent_pay(cli_runner, temp_db, sample_agent, sample_treasury):
    run(
        cli_runner,
        temp_db,
        "booking",
        "create",
        "Walk-in",
        "--sales",
        "300",
        "--service",
        "type=tour,cost=250,supplier=Petra Tours",
    )
    result = run(
        cli_runner, temp_db, "agent", "pay", "Petra Tours", "100", "--treasury", str(sample_treasury.id)
    )
    assert result.exit_code == 0
    assert "Recorded payment" in result.output
    assert "to 'Petra Tours'" in result.output

    result = run(cli_runner, temp_db, "agent", "balance", "Petra Tours")
    assert "Petra Tours: 150.00 JOD" in result.output

    result = run(cli_runner, temp_db, "treasury", "list")
    assert "-100.00 JOD" in result.output


def test_agent_statement(cli_runner, temp_db, sample_agent):
    run(
        cli_runner,
        temp_db,
        "booking",
        "create",
        "Walk-in",
        "--sales",
        "300",
        "--date",
        "2024-02-01",
        "--destination",
        "Petra",
        "--service",
        "type=tour,qty=2,cost=50,supplier=Petra Tours",
    )
    run(cli_runner, temp_db, "agent", "pay", "Petra Tours", "40", "--date", "2024-02-10")

    result = run(cli_runner, temp_db, "agent", "statement", "Petra Tours", "--csv")
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[2] == "2024-02-01,SRV-1,Tour - Petra (Walk-in),100.00,0.00,100.00"
    assert lines[3].startswith("2024-02-10,PAY-1,Payment to supplier: Petra Tours,0.00,40.00,60.00")


def test_agent_not_found(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "agent", "balance", "Nobody")
    assert result.exit_code == 1
    assert "Error: Agent 'Nobody' not found" in result.output


def test_agent_delete_with_services_blocked(cli_runner, temp_db, sample_agent):
    run(
        cli_runner,
        temp_db,
        "booking",
        "create",
        "Walk-in",
        "--sales",
        "10",
        "--service",
        "type=visa,cost=5,supplier=Petra Tours",
    )
    result = run(cli_runner, temp_db, "agent", "delete", "Petra Tours", "--yes")
    assert result.exit_code == 1
    assert "Cannot delete agent" in result.output
