"""Shared pytest fixtures for travelbooks tests."""

import tempfile
import os
import pytest

from travelbooks.database.factories import create_sqlite_database
from travelbooks.domain.booking import BookingService
from travelbooks.domain.currency import ExchangeRateTable
from travelbooks.domain.inventory import InventoryService
from travelbooks.domain.party import PartyService
from travelbooks.domain.transaction import TransactionService
from travelbooks.domain.treasury import TreasuryService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def rates():
    """Rate table with the default rates."""
    return ExchangeRateTable()


@pytest.fixture
def party_service(temp_db, rates):
    """Create a PartyService with a temporary database."""
    return PartyService(temp_db, rates=rates)


@pytest.fixture
def booking_service(temp_db, rates):
    """Create a BookingService with a temporary database."""
    return BookingService(temp_db, rates=rates)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def treasury_service(temp_db):
    """Create a TreasuryService with a temporary database."""
    return TreasuryService(temp_db)


@pytest.fixture
def inventory_service(temp_db):
    """Create an InventoryService with a temporary database."""
    return InventoryService(temp_db)


@pytest.fixture
def sample_client(party_service):
    """Create a sample client for testing."""
    client_id = party_service.create_client(name="Ahmad Saleh")
    return party_service.get_party(client_id)


@pytest.fixture
def sample_agent(party_service):
    """Create a sample agent for testing."""
    agent_id = party_service.create_agent(name="Petra Tours")
    return party_service.get_party(agent_id)


@pytest.fixture
def sample_treasury(treasury_service):
    """Create a sample cash treasury for testing."""
    treasury_id = treasury_service.create_treasury(name="Main Cash")
    return treasury_service.get_treasury(treasury_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

