"""Billing and payment tables using SQLAlchemy Core."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    text,
)

from clinic_records.models.base import metadata

# One bill per appointment or per service
billing = Table(
    "billing",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "appointment_id",
        Integer,
        ForeignKey("appointments.id", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    ),
    Column(
        "patient_id",
        Integer,
        ForeignKey("patients.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    ),
    Column("issued_at", DateTime, server_default=text("CURRENT_TIMESTAMP")),
    # Amounts
    Column("total_amount", Numeric(10, 2), nullable=False, server_default=text("0.00")),
    Column("paid_amount", Numeric(10, 2), nullable=False, server_default=text("0.00")),
    # Denormalized from paid_amount vs total_amount, maintained on payment
    Column("status", String(20), server_default="Unpaid"),
    # Constraints
    CheckConstraint(
        "status IN ('Unpaid', 'PartiallyPaid', 'Paid', 'Cancelled')",
        name="billing_status_check",
    ),
)

# Payments linked to a bill
payments = Table(
    "payments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "bill_id",
        Integer,
        ForeignKey("billing.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    ),
    Column("paid_at", DateTime, server_default=text("CURRENT_TIMESTAMP")),
    Column("amount", Numeric(10, 2), nullable=False),
    Column("method", String(20), server_default="Cash"),
    Column("transaction_reference", String(150)),
    # Constraints
    CheckConstraint(
        "method IN ('Cash', 'Card', 'MobileMoney', 'Insurance')",
        name="payments_method_check",
    ),
)
