"""
Schemas & Versioning
File: versioning.py

Purpose: Centralize proof format version constants.
Kept free of imports from other schema files to avoid circular dependencies.
"""

# Current schema version for the JSON proof envelope
SCHEMA_VERSION: str = "v1"

SUPPORTED_SCHEMA_VERSIONS: frozenset[str] = frozenset({"v1"})


class UnsupportedSchemaVersionError(ValueError):
    """Raised when an unsupported schema version is encountered."""

    def __init__(self, version: str, supported: frozenset[str] | None = None) -> None:
        self.version = version
        self.supported = supported or SUPPORTED_SCHEMA_VERSIONS
        super().__init__(
            f"Unsupported schema version: '{version}'. "
            f"Supported versions: {sorted(self.supported)}"
        )


def validate_schema_version(version: str) -> str:
    """Return version unchanged if supported, raise otherwise."""
    if version not in SUPPORTED_SCHEMA_VERSIONS:
        raise UnsupportedSchemaVersionError(version)
    return version
