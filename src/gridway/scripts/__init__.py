"""Operational scripts: migrations and demo data."""
