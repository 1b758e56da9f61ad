"""
CLI Build Command

Build a Merkle tree over the given elements and print its root.

Usage:
    arbor build John Lily Roy [--file elements.txt] [--nodes] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from core.crypto.hashing import to_hex
from core.merkle.merkle_tree import MerkleTree, build_merkle_tree
from core.schemas.errors import EmptyInputError


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of a tree build for CLI output."""
    element_count: int = 0
    node_count: int = 0
    depth: int = 0
    root: str = ""
    elements: list[str] = field(default_factory=list)
    nodes: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["nodes"]:
            del d["nodes"]
        return d


def read_elements(elements: list[str] | None, file: str | None = None) -> list[str]:
    """
    Collect elements from positional arguments and an optional file.

    File elements are one per line, appended after the positional ones;
    blank lines are skipped.
    """
    collected = list(elements or [])
    if file:
        text = Path(file).read_text(encoding="utf-8")
        collected.extend(line for line in text.splitlines() if line.strip())
    return collected


def build_summary(tree: MerkleTree, show_nodes: bool = False) -> BuildSummary:
    """Build a BuildSummary from a tree."""
    summary = BuildSummary(
        element_count=tree.size,
        node_count=len(tree.arena),
        depth=tree.depth,
        root=to_hex(tree.root_digest),
        elements=[str(e) for e in tree.elements],
    )
    if show_nodes:
        summary.nodes = [
            {
                "id": i,
                "digest": to_hex(node.digest),
                "start": node.start,
                "end": node.end,
                "left": node.left,
                "right": node.right,
            }
            for i, node in enumerate(tree.arena)
        ]
    return summary


def print_tree_human(tree: MerkleTree, show_nodes: bool = False) -> None:
    """Print a tree in human-readable format."""
    print(f"elements ({tree.size}):")
    for line in tree.describe_elements():
        print(f"  {line}")
    if show_nodes:
        print(f"\nnodes ({len(tree.arena)}):")
        for line in tree.describe_nodes():
            print(f"  {line}")
    print(f"\ndepth: {tree.depth}")
    print(f"root: {to_hex(tree.root_digest)}")


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config
    show_nodes = args.nodes or config.output.show_nodes
    output_json = args.json or config.output.format == "json"

    try:
        elements = read_elements(args.elements, args.file)
    except OSError as e:
        print(f"Error reading elements: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        tree = build_merkle_tree(elements, encoding=config.hashing.element_encoding)
    except EmptyInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Built tree over {tree.size} elements")

    if output_json:
        print(json.dumps(build_summary(tree, show_nodes).to_dict(), indent=2))
    else:
        print_tree_human(tree, show_nodes)

    return EXIT_SUCCESS
