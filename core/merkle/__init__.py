"""
Merkle Tree and Inclusion Proofs
Arena-backed Merkle tree construction + proof generation/verification.

This package provides:
- MerkleTree / MerkleNode: the immutable tree aggregate and its arena records
- build_merkle_tree: construction with odd-level padding
- get_proof: sibling digests for one element, bottom-up
- validate_proof / verify_proof / verify_leaf_digest: root recomputation
- TreeMutator / RebuildingTreeMutator: append and update by rebuilding
- InclusionProof, encode_proof, decode_proof: wire formats

Commitment Rules:
1. Leaf hashing: sha256(element bytes)
2. Parent hashing: sha256(left + right)
3. Padding: an odd level duplicates its last node (digest copied, range shifted)
4. Empty input: EmptyInputError
5. Single leaf: root = leaf

Usage:
    from core.merkle import build_merkle_tree, get_proof, validate_proof

    tree = build_merkle_tree(["John", "Lily", "Roy"])
    proof = get_proof(tree, 2)
    assert validate_proof(tree, 2, proof)
"""
from .merkle_tree import (
    NO_CHILD,
    MerkleNode,
    MerkleTree,
    build_merkle_tree,
    compute_tree_depth,
)

from .merkle_proofs import (
    get_proof,
    verify_leaf_digest,
    verify_proof,
    validate_proof,
    MerkleProver,
    MerkleVerifier,
)

from .mutation import (
    TreeMutator,
    RebuildingTreeMutator,
)

from .proof_format import (
    encode_proof,
    decode_proof,
    InclusionProof,
)


__all__ = [
    # Core types
    "NO_CHILD",
    "MerkleNode",
    "MerkleTree",
    # Construction
    "build_merkle_tree",
    "compute_tree_depth",
    # Proofs
    "get_proof",
    "verify_leaf_digest",
    "verify_proof",
    "validate_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
    # Mutation
    "TreeMutator",
    "RebuildingTreeMutator",
    # Wire formats
    "encode_proof",
    "decode_proof",
    "InclusionProof",
]
