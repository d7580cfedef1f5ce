"""Core configuration, logging and error types."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
