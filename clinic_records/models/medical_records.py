"""Medical records table using SQLAlchemy Core."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    text,
)

from clinic_records.models.base import metadata

# A patient can have many records; the appointment link is optional
medical_records = Table(
    "medical_records",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "patient_id",
        Integer,
        ForeignKey("patients.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    ),
    Column(
        "appointment_id",
        Integer,
        ForeignKey("appointments.id", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    ),
    Column("record_date", DateTime, server_default=text("CURRENT_TIMESTAMP")),
    Column("notes", Text),
    Column("diagnosis", String(255)),
)
