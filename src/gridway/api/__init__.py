# src/gridway/api/__init__.py
"""HTTP API for the Grid Way application."""
