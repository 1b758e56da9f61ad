"""
Hashing Utilities
Digest primitives shared by tree construction and proof verification.

This module provides:
- SHA-256 hashing for raw bytes
- Leaf hashing for a single element (canonical byte encoding)
- Internal node hashing over the raw concatenation of two child digests
- Hex encoding/decoding with 0x prefix

Commitment Rules:
1. Leaf hashing: leaf = sha256(encode_element(element))
2. Internal hashing: parent = sha256(left || right), no prefix or separator
3. Both are pure: equal inputs always yield byte-identical digests
"""
from __future__ import annotations

import hashlib
from typing import Any

from core.schemas.canonical import dumps_canonical


# Output size of the fixed 256-bit digest
DIGEST_SIZE: int = 32

DEFAULT_ELEMENT_ENCODING: str = "utf-8"


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def encode_element(element: Any, encoding: str = DEFAULT_ELEMENT_ENCODING) -> bytes:
    """
    Produce the canonical byte encoding of one element.

    Rules:
    - bytes / bytearray: used as-is
    - str: encoded with `encoding`
    - anything else: canonical JSON, UTF-8 encoded

    Args:
        element: The element to encode
        encoding: Text encoding applied to str elements

    Returns:
        Bytes that are hashed to form the element's leaf digest

    Raises:
        CanonicalizationException: If a structured element cannot be
            canonically serialized
    """
    if isinstance(element, (bytes, bytearray)):
        return bytes(element)
    if isinstance(element, str):
        return element.encode(encoding)
    return dumps_canonical(element).encode("utf-8")


def hash_leaf(element: Any, encoding: str = DEFAULT_ELEMENT_ENCODING) -> bytes:
    """
    Hash one element into a leaf digest.

    Args:
        element: Element value (str, bytes or canonically serializable)
        encoding: Text encoding applied to str elements

    Returns:
        32-byte SHA-256 digest
    """
    return sha256(encode_element(element, encoding))


def hash_internal(left: bytes, right: bytes) -> bytes:
    """
    Hash two child digests into their parent digest.

    parent = sha256(left || right)

    Args:
        left: Left child digest
        right: Right child digest

    Returns:
        32-byte SHA-256 digest of the concatenation
    """
    return sha256(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def digest_from_hex(hex_string: str) -> bytes:
    """Decode a 0x-prefixed hex string that must hold exactly one digest."""
    digest = from_hex(hex_string)
    if len(digest) != DIGEST_SIZE:
        raise ValueError(
            f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}"
        )
    return digest


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
