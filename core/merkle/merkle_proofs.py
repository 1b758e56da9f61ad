"""
Merkle Proofs
Inclusion proof generation from the tree arena and index-driven verification.

This module provides:
- get_proof: sibling digests for one element, leaf-to-root order
- verify_leaf_digest / verify_proof: recompute a root from a leaf and a proof
- validate_proof: verify a proof for an element held by a tree
- MerkleProver / MerkleVerifier: class-based wrappers for cleaner call sites

Generation walks the arena structurally (which child's range covers the
index) while verification derives concatenation order from the parity of
the index halved once per level. The two agree because padding only ever
appends at the end of a level: a real node at level k always sits at
position index >> k, so its parity matches its left/right slot.
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

from core.crypto.hashing import DEFAULT_ELEMENT_ENCODING, hash_internal, hash_leaf
from core.merkle.merkle_tree import MerkleTree
from core.schemas.errors import IndexOutOfRangeError, MerkleVerificationException


logger = logging.getLogger(__name__)


def get_proof(tree: MerkleTree, index: int) -> list[bytes]:
    """
    Generate an inclusion proof for the element at index.

    Algorithm:
    1. Start at the root
    2. Until a leaf is reached:
       - Pick the child whose range covers index
       - Record the other child's digest
       - Descend into the covering child
    3. Reverse the recorded digests so the closest sibling comes first

    Args:
        tree: A built MerkleTree
        index: 0-based element index

    Returns:
        Sibling digests ordered bottom-up (empty for a single-element tree)

    Raises:
        IndexOutOfRangeError: If index is not within [0, tree.size)
    """
    tree.check_index(index)

    siblings: list[bytes] = []
    node = tree.root

    while not node.is_leaf():
        left = tree.arena[node.left]
        right = tree.arena[node.right]
        if left.covers(index):
            siblings.append(right.digest)
            node = left
        else:
            siblings.append(left.digest)
            node = right

    siblings.reverse()
    logger.debug(f"Generated proof for index {index}: {len(siblings)} siblings")
    return siblings


def verify_leaf_digest(
    leaf_digest: bytes,
    index: int,
    proof: Sequence[bytes],
    root_digest: bytes,
) -> bool:
    """
    Verify a proof starting from an already-computed leaf digest.

    Algorithm:
    1. Start with the leaf digest
    2. For each sibling (bottom-up):
       - Even index: hash = hash_internal(hash, sibling)
       - Odd index: hash = hash_internal(sibling, hash)
       - index = index // 2
    3. Reject if index has bits left over (the claimed position lies
       beyond the tree the proof spans)
    4. Compare the result against root_digest byte for byte

    Args:
        leaf_digest: Digest of the element being proven
        index: The claimed element index
        proof: Sibling digests, bottom-up
        root_digest: The root to check against

    Returns:
        True if the recomputed root equals root_digest, False otherwise

    Raises:
        IndexOutOfRangeError: If index is negative
    """
    if index < 0:
        raise IndexOutOfRangeError(index)

    current = leaf_digest
    current_index = index

    try:
        for sibling in proof:
            if current_index % 2 == 0:
                current = hash_internal(current, sibling)
            else:
                current = hash_internal(sibling, current)
            current_index = current_index // 2
    except TypeError:
        # Non-bytes proof entries
        return False

    # A real position is fully consumed by the time the root is reached
    if current_index != 0:
        return False

    return current == root_digest


def verify_proof(
    element: Any,
    index: int,
    proof: Sequence[bytes],
    root_digest: bytes,
    encoding: str = DEFAULT_ELEMENT_ENCODING,
) -> bool:
    """
    Verify that element sits at index under root_digest.

    The element is hashed into its leaf digest first; see
    verify_leaf_digest for the recomputation rules.
    """
    return verify_leaf_digest(
        hash_leaf(element, encoding), index, proof, root_digest
    )


def validate_proof(tree: MerkleTree, index: int, proof: Sequence[bytes]) -> bool:
    """
    Validate a proof for the element the tree holds at index.

    Only the element and the stored root digest are read; the arena
    is not consulted.

    Raises:
        IndexOutOfRangeError: If index is not within [0, tree.size)
    """
    tree.check_index(index)
    return verify_proof(
        tree.elements[index],
        index,
        proof,
        tree.root_digest,
        encoding=tree.encoding,
    )


class MerkleProver:
    """
    Convenience class for generating proofs.

    Example:
        >>> tree = MerkleProver.build(["a", "b", "c"])
        >>> proof = MerkleProver.prove(tree, 2)
        >>> len(proof)
        2
    """

    @staticmethod
    def build(elements: Sequence[Any], encoding: str = DEFAULT_ELEMENT_ENCODING) -> MerkleTree:
        return MerkleTree.build(elements, encoding=encoding)

    @staticmethod
    def prove(tree: MerkleTree, index: int) -> list[bytes]:
        """Generate the proof for the element at index."""
        return get_proof(tree, index)

    @staticmethod
    def prove_all(tree: MerkleTree) -> list[list[bytes]]:
        """Generate a proof for every element, in element order."""
        return [get_proof(tree, i) for i in range(tree.size)]


class MerkleVerifier:
    """
    Convenience class for verifying proofs.

    Example:
        >>> proof = MerkleProver.prove(tree, 1)
        >>> MerkleVerifier.verify(tree, 1, proof)
        True
    """

    @staticmethod
    def verify(tree: MerkleTree, index: int, proof: Sequence[bytes]) -> bool:
        return validate_proof(tree, index, proof)

    @staticmethod
    def verify_element_in_root(
        element: Any,
        index: int,
        proof: Sequence[bytes],
        root: bytes,
        encoding: str = DEFAULT_ELEMENT_ENCODING,
    ) -> bool:
        """Verify an element against a bare root digest, no tree needed."""
        return verify_proof(element, index, proof, root, encoding=encoding)

    @staticmethod
    def require_valid(
        element: Any,
        index: int,
        proof: Sequence[bytes],
        root: bytes,
        encoding: str = DEFAULT_ELEMENT_ENCODING,
    ) -> None:
        """
        Raise instead of returning False when the proof does not verify.

        Raises:
            MerkleVerificationException: If the proof does not verify
            IndexOutOfRangeError: If index is negative
        """
        if not verify_proof(element, index, proof, root, encoding=encoding):
            raise MerkleVerificationException(
                f"Proof does not reconstruct the root for index {index}",
                leaf_index=index,
                details={"proof_length": len(proof)},
            )


__all__ = [
    "get_proof",
    "verify_leaf_digest",
    "verify_proof",
    "validate_proof",
    "MerkleProver",
    "MerkleVerifier",
]
