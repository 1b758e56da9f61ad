"""
Core cryptographic utilities.

Single fixed digest (SHA-256) used for leaf and internal node hashing.
"""
from .hashing import (
    DIGEST_SIZE,
    DEFAULT_ELEMENT_ENCODING,
    sha256,
    encode_element,
    hash_leaf,
    hash_internal,
    to_hex,
    from_hex,
    digest_from_hex,
)

__all__ = [
    "DIGEST_SIZE",
    "DEFAULT_ELEMENT_ENCODING",
    "sha256",
    "encode_element",
    "hash_leaf",
    "hash_internal",
    "to_hex",
    "from_hex",
    "digest_from_hex",
]
