"""Exam and consultation rooms table using SQLAlchemy Core."""

from sqlalchemy import Column, Integer, String, Table

from clinic_records.models.base import metadata

rooms = Table(
    "rooms",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("room_number", String(20), nullable=False, unique=True),
    Column("floor", String(20)),
    Column("notes", String(255)),
)
