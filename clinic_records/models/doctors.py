"""Doctor model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    ForeignKey,
    Integer,
    String,
    Table,
    true,
)

from clinic_records.models.base import metadata

doctors = Table(
    "doctors",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    # Contact
    Column("email", String(150), nullable=False, unique=True),
    Column("phone", String(30)),
    # Professional credentials
    Column("license_no", String(50), nullable=False, unique=True),
    Column("hired_date", Date),
    # State only, no transition rules attached
    Column("active", Boolean, server_default=true()),
)

# Many-to-many: a doctor can hold several specialties
doctor_specialties = Table(
    "doctor_specialties",
    metadata,
    Column(
        "doctor_id",
        Integer,
        ForeignKey("doctors.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    ),
    Column(
        "specialty_id",
        Integer,
        ForeignKey("specialties.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    ),
)
