"""Prescription tables using SQLAlchemy Core."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    text,
)

from clinic_records.models.base import metadata

# Each prescription is issued by a doctor for a patient
prescriptions = Table(
    "prescriptions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "patient_id",
        Integer,
        ForeignKey("patients.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    ),
    Column(
        "doctor_id",
        Integer,
        ForeignKey("doctors.id", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
    ),
    Column(
        "appointment_id",
        Integer,
        ForeignKey("appointments.id", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    ),
    Column("issued_at", DateTime, server_default=text("CURRENT_TIMESTAMP")),
    Column("notes", String(500)),
)

# Many-to-many between prescriptions and medications with dosage details
prescription_items = Table(
    "prescription_items",
    metadata,
    Column(
        "prescription_id",
        Integer,
        ForeignKey("prescriptions.id", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    ),
    Column(
        "medication_id",
        Integer,
        ForeignKey("medications.id", ondelete="RESTRICT", onupdate="CASCADE"),
        primary_key=True,
    ),
    Column("dosage", String(100), nullable=False),  # "500mg twice daily"
    Column("duration", String(50)),  # "7 days"
    Column("quantity", Integer, server_default=text("1")),
)
