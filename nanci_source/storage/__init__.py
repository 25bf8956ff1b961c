"""
Storage Layer.

This package handles configuration file persistence.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
