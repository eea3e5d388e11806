"""
Configuration management for the barcode validator.
"""

from barcheck.config.logging import configure_logging, get_logger
from barcheck.config.settings import Settings, get_settings

__all__ = ["Settings", "configure_logging", "get_logger", "get_settings"]
