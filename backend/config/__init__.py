"""
Configuration package.
"""

from .app_config import AppConfig, load_config, settings

__all__ = ["AppConfig", "load_config", "settings"]
