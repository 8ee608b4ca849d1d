"""Clinic administrative records: schema, seed data and data access."""

__version__ = "0.1.0"
