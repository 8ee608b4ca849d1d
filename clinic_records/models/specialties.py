"""Specialty and medication catalog tables using SQLAlchemy Core."""

from sqlalchemy import Column, Integer, String, Table

from clinic_records.models.base import metadata

# Specialties (e.g., Pediatrics, General Practice, Cardiology)
specialties = Table(
    "specialties",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False, unique=True),
    Column("description", String(255)),
)

# Medications catalog
medications = Table(
    "medications",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(150), nullable=False, unique=True),
    Column("manufacturer", String(150)),
    Column("formulation", String(100)),  # tablet, syrup, capsule
)
