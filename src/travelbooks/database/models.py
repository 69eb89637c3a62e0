"""SQLAlchemy models for travelbooks database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

MONEY = Numeric(14, 4)


class Party(Base):
    """Client or agent model."""

    __tablename__ = "parties"

    id = Column(Integer, primary_key=True)
    kind = Column(String, nullable=False)
    name = Column(String, nullable=False)
    party_type = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    opening_balance = Column(MONEY, default=0, nullable=False)
    credit_limit = Column(MONEY, nullable=True)
    currency = Column(String, default="JOD", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("kind", "name", name="uq_party_kind_name"),)


class Treasury(Base):
    """Cash, bank or checks account model."""

    __tablename__ = "treasuries"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    treasury_type = Column(String, nullable=False)
    balance = Column(MONEY, default=0, nullable=False)
    currency = Column(String, default="JOD", nullable=False)
    account_number = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Booking(Base):
    """Booking model."""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True)
    file_no = Column(String, nullable=True)
    client_name = Column(String, nullable=False)
    client_id = Column(Integer, ForeignKey("parties.id"), nullable=True)
    destination = Column(String, default="", nullable=False)
    booking_type = Column(String, default="General", nullable=False)
    date = Column(Date, nullable=False)
    amount = Column(MONEY, nullable=False)
    cost = Column(MONEY, nullable=False)
    profit = Column(MONEY, nullable=False)
    paid_amount = Column(MONEY, default=0, nullable=False)
    status = Column(String, nullable=False)
    payment_status = Column(String, nullable=False)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    services = relationship(
        "ServiceLine",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="ServiceLine.id",
    )
    payments = relationship(
        "Payment",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="Payment.id",
    )


class ServiceLine(Base):
    """Service line within a booking."""

    __tablename__ = "service_lines"

    id = Column(Integer, primary_key=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False)
    service_type = Column(String, nullable=False)
    quantity = Column(Integer, default=1, nullable=False)
    cost_price = Column(MONEY, default=0, nullable=False)
    cost_currency = Column(String, default="JOD", nullable=False)
    selling_price = Column(MONEY, default=0, nullable=False)
    supplier = Column(String, nullable=True)
    supplier_id = Column(Integer, ForeignKey("parties.id"), nullable=True)
    inventory_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=True)
    check_in = Column(Date, nullable=True)
    check_out = Column(Date, nullable=True)
    room_count = Column(Integer, nullable=True)
    details = Column(String, nullable=True)

    # Relationships
    booking = relationship("Booking", back_populates="services")


class Payment(Base):
    """Payment applied to a booking."""

    __tablename__ = "payments"

    id = Column(Integer, primary_key=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False)
    amount = Column(MONEY, nullable=False)
    currency = Column(String, nullable=False)
    exchange_rate = Column(Numeric(18, 6), nullable=False)
    final_amount = Column(MONEY, nullable=False)
    date = Column(Date, nullable=False)
    treasury_id = Column(Integer, ForeignKey("treasuries.id"), nullable=True)
    notes = Column(String, nullable=True)

    # Relationships
    booking = relationship("Booking", back_populates="payments")


class Transaction(Base):
    """Cash movement model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False)
    amount = Column(MONEY, nullable=False)
    description = Column(String, default="", nullable=False)
    reference_no = Column(String, nullable=True)
    treasury_id = Column(Integer, ForeignKey("treasuries.id"), nullable=True)
    party_id = Column(Integer, ForeignKey("parties.id"), nullable=True)
    reverses_id = Column(Integer, ForeignKey("transactions.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class ExchangeRate(Base):
    """Persisted rate for a non-base currency."""

    __tablename__ = "exchange_rates"

    currency = Column(String, primary_key=True)
    rate = Column(Numeric(18, 6), nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class InventoryItem(Base):
    """Prepaid product held in stock."""

    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    service_type = Column(String, nullable=False)
    supplier = Column(String, nullable=True)
    total_quantity = Column(Integer, default=0, nullable=False)
    cost_price = Column(MONEY, default=0, nullable=False)
    selling_price = Column(MONEY, default=0, nullable=False)
    currency = Column(String, default="JOD", nullable=False)
    description = Column(String, nullable=True)
    expiry_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
