"""Shared utilities and configuration for the visual novel project."""

# Export setup_logger for external use
from .logging import setup_logger

__all__ = ["setup_logger"]
