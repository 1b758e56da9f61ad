"""
Runtime Configuration

Central configuration for logging, output rendering and element hashing.
"""

from __future__ import annotations

import codecs
import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.crypto.hashing import DEFAULT_ELEMENT_ENCODING
from core.schemas.errors import ConfigException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "ARBOR_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
OUTPUT_FORMATS = ("human", "json")
CONFIG_SECTIONS = ("logging", "output", "hashing")


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.level, str):
            raise ConfigException(
                f"Log level must be a string, got {type(self.level).__name__}",
                field_path="logging.level",
            )
        self.level = self.level.upper()
        if self.level not in LOG_LEVELS:
            raise ConfigException(
                f"Unknown log level: {self.level}",
                field_path="logging.level",
            )
        if self.file is not None and not isinstance(self.file, str):
            raise ConfigException(
                f"Log file must be a string path, got {type(self.file).__name__}",
                field_path="logging.file",
            )


@dataclass
class OutputConfig:
    """Configuration for CLI rendering."""
    format: str = "human"  # "human" or "json"
    show_nodes: bool = False

    def __post_init__(self):
        if self.format not in OUTPUT_FORMATS:
            raise ConfigException(
                f"Unknown output format: {self.format}",
                field_path="output.format",
            )
        if not isinstance(self.show_nodes, bool):
            raise ConfigException(
                f"show_nodes must be true or false, got {self.show_nodes!r}",
                field_path="output.show_nodes",
            )


@dataclass
class HashingConfig:
    """Configuration for turning elements into leaf digests."""
    element_encoding: str = DEFAULT_ELEMENT_ENCODING

    def __post_init__(self):
        if not isinstance(self.element_encoding, str):
            raise ConfigException(
                f"Element encoding must be a string, got {type(self.element_encoding).__name__}",
                field_path="hashing.element_encoding",
            )
        try:
            codecs.lookup(self.element_encoding)
        except LookupError as e:
            raise ConfigException(
                f"Unknown element encoding: {self.element_encoding}",
                field_path="hashing.element_encoding",
            ) from e


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (ARBOR_* prefix, .env honoured)
    - JSON file
    - Programmatic construction
    """
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    hashing: HashingConfig = field(default_factory=HashingConfig)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - ARBOR_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR)
        - ARBOR_LOG_FILE: Additional log file path
        - ARBOR_OUTPUT_FORMAT: human or json
        - ARBOR_SHOW_NODES: Print the node arena after builds (true/false)
        - ARBOR_ELEMENT_ENCODING: Text encoding for str elements
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
            overrides.setdefault("output", {})["format"] = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT")
        if os.getenv(f"{ENV_PREFIX}SHOW_NODES"):
            overrides.setdefault("output", {})["show_nodes"] = _parse_bool(
                os.getenv(f"{ENV_PREFIX}SHOW_NODES", "false")
            )

        if os.getenv(f"{ENV_PREFIX}ELEMENT_ENCODING"):
            overrides.setdefault("hashing", {})["element_encoding"] = os.getenv(
                f"{ENV_PREFIX}ELEMENT_ENCODING"
            )

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigException(
                    f"Config file is not valid JSON: {path}",
                    details={"error": str(e)},
                ) from e

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        if not isinstance(data, dict):
            raise ConfigException(
                f"Configuration must be a JSON object, got {type(data).__name__}",
            )

        unknown = sorted(set(data) - set(CONFIG_SECTIONS))
        if unknown:
            raise ConfigException(
                f"Unknown configuration section: {', '.join(map(str, unknown))}",
                details={"sections": [str(s) for s in unknown]},
            )

        for section in CONFIG_SECTIONS:
            if not isinstance(data.get(section, {}), dict):
                raise ConfigException(
                    f"Configuration section '{section}' must be an object",
                    field_path=section,
                )

        try:
            logging_conf = LoggingConfig(**data.get("logging", {}))
            output_conf = OutputConfig(**data.get("output", {}))
            hashing_conf = HashingConfig(**data.get("hashing", {}))
        except TypeError as e:
            raise ConfigException(
                f"Unknown configuration key: {e}",
                details={"error": str(e)},
            ) from e

        return cls(
            logging=logging_conf,
            output=output_conf,
            hashing=hashing_conf,
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        return RuntimeConfig(
            logging=replace(self.logging, **overrides.get("logging", {})),
            output=replace(self.output, **overrides.get("output", {})),
            hashing=replace(self.hashing, **overrides.get("hashing", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "output": {
                "format": self.output.format,
                "show_nodes": self.output.show_nodes,
            },
            "hashing": {
                "element_encoding": self.hashing.element_encoding,
            },
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig) -> None:
    """Set the default runtime configuration."""
    global _default_config
    _default_config = config
