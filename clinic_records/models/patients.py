"""Patient model definition using SQLAlchemy Core."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Integer,
    String,
    Table,
    text,
)

from clinic_records.models.base import metadata

patients = Table(
    "patients",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    # Personal information
    Column("date_of_birth", Date),
    Column("gender", String(10), server_default="Other"),
    # Contact
    Column("email", String(150)),
    Column("phone", String(30)),
    Column("address", String(255)),
    # Metadata
    Column("created_at", DateTime, server_default=text("CURRENT_TIMESTAMP")),
    # Constraints
    CheckConstraint(
        "gender IN ('Male', 'Female', 'Other')",
        name="patients_gender_check",
    ),
)
