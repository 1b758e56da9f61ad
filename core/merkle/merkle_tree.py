"""
Merkle Tree Construction
Arena-backed Merkle tree built level by level over an ordered element list.

This module provides:
- MerkleNode: one arena record (digest, covered range, child indices)
- MerkleTree: the aggregate (elements, arena, root)
- build_merkle_tree: deterministic construction with odd-level padding
- compute_tree_depth: number of levels for a given element count

Construction Rules (Hard Contracts):
1. Leaves: one node per element, range [i, i], digest = hash_leaf(element)
2. Padding: an odd level gets one extra node that copies the last node's
   digest verbatim, its range shifted forward by that node's width and
   with no children
3. Reduction: adjacent pairs (i, i+1) produce a parent with
   range [left.start, right.end] and digest = hash_internal(left, right)
4. The last node appended to the arena is the root
5. Single element: the arena holds one node and the root is that leaf

Arena Notes:
- Nodes are appended bottom-up and never moved, so indices are stable
- Children are referenced by arena index; NO_CHILD (-1) marks leaves
  and padding nodes
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable

from core.crypto.hashing import (
    DEFAULT_ELEMENT_ENCODING,
    hash_internal,
    hash_leaf,
    to_hex,
)
from core.schemas.errors import EmptyInputError, IndexOutOfRangeError


logger = logging.getLogger(__name__)

# Child index sentinel for leaves and padding nodes
NO_CHILD: int = -1


@dataclass(frozen=True)
class MerkleNode:
    """
    A single node record in the tree arena.

    Attributes:
        digest: 32-byte digest of this node
        start: First element index covered by this node (inclusive)
        end: Last element index covered by this node (inclusive)
        left: Arena index of the left child, or NO_CHILD
        right: Arena index of the right child, or NO_CHILD
    """
    digest: bytes
    start: int
    end: int
    left: int = NO_CHILD
    right: int = NO_CHILD

    @property
    def width(self) -> int:
        """Number of element positions covered by this node."""
        return self.end - self.start + 1

    @property
    def has_children(self) -> bool:
        return self.left != NO_CHILD and self.right != NO_CHILD

    def is_leaf(self) -> bool:
        """Check if this node stands for exactly one element position."""
        return not self.has_children and self.start == self.end

    def covers(self, index: int) -> bool:
        """Check if index falls inside this node's range."""
        return self.start <= index <= self.end


@dataclass(frozen=True)
class MerkleTree:
    """
    Immutable Merkle tree over an ordered element sequence.

    The root is kept as a separate value copy of the final arena node
    for direct access; it always equals arena[-1].

    Attributes:
        elements: The ordered input elements
        arena: Every node, leaves first, root last
        root: Copy of the root node
        encoding: Text encoding used when hashing str elements
    """
    elements: tuple[Any, ...]
    arena: tuple[MerkleNode, ...]
    root: MerkleNode
    encoding: str = DEFAULT_ELEMENT_ENCODING

    @classmethod
    def build(
        cls,
        elements: Iterable[Any],
        encoding: str = DEFAULT_ELEMENT_ENCODING,
    ) -> "MerkleTree":
        """Build a tree from elements. See build_merkle_tree."""
        return build_merkle_tree(elements, encoding=encoding)

    @property
    def size(self) -> int:
        """Number of real elements (padding excluded)."""
        return len(self.elements)

    @property
    def root_digest(self) -> bytes:
        return self.root.digest

    @property
    def depth(self) -> int:
        return compute_tree_depth(self.size)

    def check_index(self, index: int) -> None:
        """
        Ensure index addresses a real element.

        Raises:
            IndexOutOfRangeError: If index is not within [0, size)
        """
        if index < 0 or index >= self.size:
            raise IndexOutOfRangeError(index, self.size)

    def leaf_digest(self, index: int) -> bytes:
        """Get the leaf digest of the element at index."""
        self.check_index(index)
        # Leaves occupy the first `size` arena slots in element order
        return self.arena[index].digest

    def describe_elements(self) -> list[str]:
        """One line per element, in order."""
        return [f"{i} {element}" for i, element in enumerate(self.elements)]

    def describe_nodes(self) -> list[str]:
        """One line per arena node: index, digest, range and children."""
        return [
            f"{i} {to_hex(node.digest)} [{node.start}, {node.end}] "
            f"left={node.left} right={node.right}"
            for i, node in enumerate(self.arena)
        ]


def _padding_node(node: MerkleNode) -> MerkleNode:
    """Duplicate node's digest into the range immediately after it."""
    width = node.width
    return MerkleNode(
        digest=node.digest,
        start=node.start + width,
        end=node.end + width,
    )


def build_merkle_tree(
    elements: Iterable[Any],
    encoding: str = DEFAULT_ELEMENT_ENCODING,
) -> MerkleTree:
    """
    Build a Merkle tree from an ordered, non-empty element sequence.

    Algorithm:
    1. Append one leaf per element
    2. While the current level holds more than one node:
       - If its count is odd, append a padding node
       - Pair adjacent nodes and append their parents as the next level
    3. The last node appended is the root

    Example: [a, b, c]
        arena: [a, b, c, c', ab, cc', root]
        root = H(H(a || b) || H(c || c))

    Args:
        elements: Ordered elements; order is preserved, never sorted
        encoding: Text encoding applied to str elements

    Returns:
        The built MerkleTree

    Raises:
        EmptyInputError: If elements is empty
    """
    items = tuple(elements)
    if not items:
        raise EmptyInputError()

    arena: list[MerkleNode] = [
        MerkleNode(digest=hash_leaf(element, encoding), start=i, end=i)
        for i, element in enumerate(items)
    ]

    level_start = 0
    level_count = len(arena)

    while level_count > 1:
        if level_count % 2 == 1:
            arena.append(_padding_node(arena[-1]))
            level_count += 1

        next_start = len(arena)
        for i in range(level_start, level_start + level_count, 2):
            left = arena[i]
            right = arena[i + 1]
            arena.append(
                MerkleNode(
                    digest=hash_internal(left.digest, right.digest),
                    start=left.start,
                    end=right.end,
                    left=i,
                    right=i + 1,
                )
            )

        level_start = next_start
        level_count = len(arena) - next_start

    tree = MerkleTree(
        elements=items,
        arena=tuple(arena),
        root=replace(arena[-1]),
        encoding=encoding,
    )
    logger.debug(
        f"Built Merkle tree: {tree.size} elements, {len(arena)} nodes, "
        f"root {to_hex(tree.root_digest)}"
    )
    return tree


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of levels of a tree with the given element count.

    Depth counts the leaf level and the root level, including levels
    produced by padding. A single leaf has depth 1, two leaves depth 2.
    A proof for any element holds depth - 1 siblings.

    Args:
        num_leaves: Number of elements

    Returns:
        Tree depth (0 for no elements)
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        if n % 2 == 1:
            n += 1
        n = n // 2
        depth += 1

    return depth


__all__ = [
    "NO_CHILD",
    "MerkleNode",
    "MerkleTree",
    "build_merkle_tree",
    "compute_tree_depth",
]
