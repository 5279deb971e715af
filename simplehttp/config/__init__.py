"""
Runtime Configuration Module

Provides configuration loading for the shared client.
"""

from .runtime import ClientConfig, get_default_config, set_default_config

__all__ = [
    "ClientConfig",
    "get_default_config",
    "set_default_config",
]
