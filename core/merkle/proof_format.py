"""
Proof Wire Formats
Binary and JSON representations of inclusion proofs.

Binary layout (big-endian):
    count: uint32
    siblings: count * 32 digest bytes, bottom-up

JSON envelope: InclusionProof, with every digest as a 0x-prefixed hex string.
"""
from __future__ import annotations

import struct
from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from core.crypto.hashing import (
    DEFAULT_ELEMENT_ENCODING,
    DIGEST_SIZE,
    digest_from_hex,
    hash_leaf,
    to_hex,
)
from core.merkle.merkle_proofs import get_proof, verify_leaf_digest
from core.merkle.merkle_tree import MerkleTree
from core.schemas.errors import ProofFormatException
from core.schemas.versioning import SCHEMA_VERSION, validate_schema_version


_COUNT = struct.Struct(">I")


def encode_proof(proof: Sequence[bytes]) -> bytes:
    """
    Encode sibling digests as a length-prefixed digest array.

    Raises:
        ProofFormatException: If any entry is not exactly one digest long
    """
    for position, digest in enumerate(proof):
        if len(digest) != DIGEST_SIZE:
            raise ProofFormatException(
                f"Proof entry {position} is {len(digest)} bytes, expected {DIGEST_SIZE}",
                details={"position": position, "length": len(digest)},
            )
    return _COUNT.pack(len(proof)) + b"".join(bytes(d) for d in proof)


def decode_proof(data: bytes) -> list[bytes]:
    """
    Decode a length-prefixed digest array produced by encode_proof.

    Raises:
        ProofFormatException: If the header is missing or the body length
            does not match the declared count
    """
    if len(data) < _COUNT.size:
        raise ProofFormatException(
            f"Proof data too short for header: {len(data)} bytes",
            details={"length": len(data)},
        )

    (count,) = _COUNT.unpack_from(data)
    body = data[_COUNT.size:]
    expected = count * DIGEST_SIZE
    if len(body) != expected:
        raise ProofFormatException(
            f"Proof declares {count} digests ({expected} bytes) but carries {len(body)} bytes",
            details={"count": count, "body_length": len(body)},
        )

    return [
        bytes(body[offset:offset + DIGEST_SIZE])
        for offset in range(0, expected, DIGEST_SIZE)
    ]


class InclusionProof(BaseModel):
    """
    Self-contained inclusion proof for transport.

    Carries everything needed to verify membership offline: the leaf
    digest, its index, the sibling digests (bottom-up) and the root.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    index: int = Field(..., ge=0, description="0-based element index")
    element_count: int | None = Field(
        default=None,
        ge=1,
        description="Number of elements in the tree the proof was taken from",
    )
    leaf: str = Field(..., description="Leaf digest, 0x-prefixed hex")
    siblings: list[str] = Field(
        default_factory=list,
        description="Sibling digests bottom-up, 0x-prefixed hex",
    )
    root: str = Field(..., description="Root digest, 0x-prefixed hex")

    @field_validator("schema_version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        return validate_schema_version(value)

    @field_validator("leaf", "root")
    @classmethod
    def _check_digest(cls, value: str) -> str:
        digest_from_hex(value)
        return value.lower()

    @field_validator("siblings")
    @classmethod
    def _check_siblings(cls, value: list[str]) -> list[str]:
        for entry in value:
            digest_from_hex(entry)
        return [entry.lower() for entry in value]

    @model_validator(mode="after")
    def _check_index_bound(self) -> "InclusionProof":
        if self.element_count is not None and self.index >= self.element_count:
            raise ValueError(
                f"index {self.index} out of range for {self.element_count} elements"
            )
        return self

    @classmethod
    def from_tree(cls, tree: MerkleTree, index: int) -> "InclusionProof":
        """
        Build the envelope for one element of a tree.

        Raises:
            IndexOutOfRangeError: If index is not within [0, tree.size)
        """
        siblings = get_proof(tree, index)
        return cls(
            index=index,
            element_count=tree.size,
            leaf=to_hex(tree.leaf_digest(index)),
            siblings=[to_hex(s) for s in siblings],
            root=to_hex(tree.root_digest),
        )

    def leaf_bytes(self) -> bytes:
        return digest_from_hex(self.leaf)

    def sibling_bytes(self) -> list[bytes]:
        return [digest_from_hex(s) for s in self.siblings]

    def root_bytes(self) -> bytes:
        return digest_from_hex(self.root)

    def verify(self) -> bool:
        """Check that leaf and siblings reconstruct root."""
        return verify_leaf_digest(
            self.leaf_bytes(), self.index, self.sibling_bytes(), self.root_bytes()
        )

    def verify_element(self, element: Any, encoding: str = DEFAULT_ELEMENT_ENCODING) -> bool:
        """Check that element hashes to leaf and the proof verifies."""
        if hash_leaf(element, encoding) != self.leaf_bytes():
            return False
        return self.verify()

    def to_binary(self) -> bytes:
        """Sibling digests in the binary wire layout."""
        return encode_proof(self.sibling_bytes())


__all__ = [
    "encode_proof",
    "decode_proof",
    "InclusionProof",
]
