# src/gridway/__init__.py
"""Grid Way: swipe-based discovery and matching for conference attendees."""

__version__ = "0.1.0"
