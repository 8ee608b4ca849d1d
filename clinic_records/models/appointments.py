"""Appointments table model using SQLAlchemy Core."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    text,
)

from clinic_records.models.base import metadata

# One appointment is for one patient and one doctor
appointments = Table(
    "appointments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    # References
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
        "room_id",
        Integer,
        ForeignKey("rooms.id", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    ),
    # Schedule
    Column("scheduled_start", DateTime, nullable=False),
    Column("scheduled_end", DateTime, nullable=False),
    # Status management
    Column("status", String(20), server_default="Scheduled"),
    Column("reason", String(255)),
    # Metadata
    Column("created_at", DateTime, server_default=text("CURRENT_TIMESTAMP")),
    # Constraints
    CheckConstraint(
        "scheduled_end > scheduled_start",
        name="appointments_schedule_check",
    ),
    CheckConstraint(
        "status IN ('Scheduled', 'CheckedIn', 'Completed', 'Cancelled', 'NoShow')",
        name="appointments_status_check",
    ),
)

# Quick lookups by doctor and date
Index(
    "idx_appointments_doctor_start",
    appointments.c.doctor_id,
    appointments.c.scheduled_start,
)
