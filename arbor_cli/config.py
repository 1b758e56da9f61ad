"""
CLI Configuration

Locates and loads the runtime configuration for the CLI.
File settings are applied first, environment variables override them.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.config.runtime import RuntimeConfig


def default_config_paths() -> list[Path]:
    """Config locations searched when no explicit path is given."""
    return [
        Path.cwd() / "arbor.json",
        Path.cwd() / ".arbor.json",
        Path.home() / ".config" / "arbor" / "config.json",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = RuntimeConfig()

    if config_path is not None:
        if config_path.exists():
            config = RuntimeConfig.from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = RuntimeConfig.from_file(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"
