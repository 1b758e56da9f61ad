"""
Test fixtures package for Merkle tree tests.

This package provides factory functions for creating test objects:
- common.py: element lists, trees, reference roots and tamper helpers

Usage:
    from fixtures import make_elements, make_tree

    def test_something():
        tree = make_tree(5)
"""

from .common import (
    make_elements,
    make_tree,
    leaf,
    node,
    reference_root,
    flip_byte,
    structural_sides,
)

__all__ = [
    "make_elements",
    "make_tree",
    "leaf",
    "node",
    "reference_root",
    "flip_byte",
    "structural_sides",
]
