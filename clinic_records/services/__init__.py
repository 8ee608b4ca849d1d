"""Data access services."""
