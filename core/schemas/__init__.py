"""
Schemas & Canonicalization

Error taxonomy, canonical serialization and version constants shared
by the tree, proof and CLI layers.
"""

from .errors import (
    ErrorCodes,
    MerkleError,
    MerkleException,
    EmptyInputError,
    IndexOutOfRangeError,
    ProofFormatException,
    MerkleVerificationException,
    CanonicalizationException,
    ConfigException,
)
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
)
from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    UnsupportedSchemaVersionError,
    validate_schema_version,
)

__all__ = [
    # Errors
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "EmptyInputError",
    "IndexOutOfRangeError",
    "ProofFormatException",
    "MerkleVerificationException",
    "CanonicalizationException",
    "ConfigException",
    # Canonical serialization
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "format_datetime_canonical",
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "UnsupportedSchemaVersionError",
    "validate_schema_version",
]
