"""
Tree Mutation
Extension interface for producing a new tree from an edited element list.

Trees are immutable, so every mutation returns a new MerkleTree. Any
implementation must yield a root that is byte-identical to building a
fresh tree from the edited element sequence.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from core.merkle.merkle_tree import MerkleTree, build_merkle_tree


logger = logging.getLogger(__name__)


class TreeMutator(ABC):
    """Capability for deriving trees with appended or replaced elements."""

    @abstractmethod
    def append_element(self, tree: MerkleTree, element: Any) -> MerkleTree:
        """Return a tree holding tree's elements followed by element."""

    @abstractmethod
    def update_element(self, tree: MerkleTree, index: int, element: Any) -> MerkleTree:
        """
        Return a tree whose element at index is replaced by element.

        Raises:
            IndexOutOfRangeError: If index is not within [0, tree.size)
        """


class RebuildingTreeMutator(TreeMutator):
    """Applies every mutation by rebuilding the whole tree."""

    def append_element(self, tree: MerkleTree, element: Any) -> MerkleTree:
        logger.debug(f"Appending element at index {tree.size}, rebuilding")
        return build_merkle_tree(tree.elements + (element,), encoding=tree.encoding)

    def update_element(self, tree: MerkleTree, index: int, element: Any) -> MerkleTree:
        tree.check_index(index)
        elements = list(tree.elements)
        elements[index] = element
        logger.debug(f"Updating element at index {index}, rebuilding")
        return build_merkle_tree(elements, encoding=tree.encoding)


__all__ = [
    "TreeMutator",
    "RebuildingTreeMutator",
]
