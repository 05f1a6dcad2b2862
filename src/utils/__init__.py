"""Utilities package for catalog-manager application."""

from .config import Config, get_config, reset_config

__all__ = [
    "Config",
    "get_config",
    "reset_config",
]
