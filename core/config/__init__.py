"""
Runtime Configuration Module

Provides configuration loading and management for tree building and the CLI.
"""

from .runtime import (
    RuntimeConfig,
    LoggingConfig,
    OutputConfig,
    HashingConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "RuntimeConfig",
    "LoggingConfig",
    "OutputConfig",
    "HashingConfig",
    "get_default_config",
    "set_default_config",
]
