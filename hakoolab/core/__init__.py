"""
HakooLab Core Module
====================
Shared logging and configuration infrastructure.
"""

from .config import Settings, get_settings, reset_settings
from .logger import logger, setup_logger, get_logger

__all__ = ["Settings", "get_settings", "reset_settings", "logger", "setup_logger", "get_logger"]
