"""
Common test fixtures shared by all modules.

Digest helpers here are computed with hashlib directly so expectations
never depend on the code under test.
"""

import hashlib
from typing import Sequence

from core.merkle.merkle_tree import MerkleTree, build_merkle_tree


def leaf(text: str) -> bytes:
    """Expected leaf digest of a text element: sha256(utf-8 bytes)."""
    return hashlib.sha256(text.encode("utf-8")).digest()


def node(left: bytes, right: bytes) -> bytes:
    """Expected internal digest: sha256(left || right)."""
    return hashlib.sha256(left + right).digest()


def make_elements(count: int, prefix: str = "element") -> list[str]:
    """Create `count` distinct text elements."""
    return [f"{prefix}{i}" for i in range(count)]


def make_tree(count: int, prefix: str = "element") -> MerkleTree:
    """Build a tree over `count` distinct text elements."""
    return build_merkle_tree(make_elements(count, prefix))


def reference_root(elements: Sequence[str]) -> bytes:
    """
    Root computed level by level over plain digest lists.

    Odd levels are padded by repeating the last digest.
    """
    level = [leaf(e) for e in elements]
    while len(level) > 1:
        if len(level) % 2 == 1:
            level.append(level[-1])
        level = [node(level[i], level[i + 1]) for i in range(0, len(level), 2)]
    return level[0]


def flip_byte(digest: bytes, position: int = 0) -> bytes:
    """Return digest with one bit of one byte flipped."""
    data = bytearray(digest)
    data[position] ^= 0x01
    return bytes(data)


def structural_sides(tree: MerkleTree, index: int) -> list[int]:
    """
    Walk the arena from root to the leaf for index.

    Returns 1 for every level where the path goes through a right child,
    0 for a left child, ordered leaf-level first.
    """
    sides: list[int] = []
    current = tree.root
    while not current.is_leaf():
        left = tree.arena[current.left]
        if left.covers(index):
            sides.append(0)
            current = left
        else:
            sides.append(1)
            current = tree.arena[current.right]
    sides.reverse()
    return sides
