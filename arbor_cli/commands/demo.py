"""
CLI Demo Command

Walk through a full build, prove and validate cycle on a fixed element list.

Usage:
    arbor demo [--index 2]
"""

from __future__ import annotations

import sys
from argparse import Namespace

from core.crypto.hashing import to_hex
from core.merkle.merkle_proofs import get_proof, validate_proof
from core.merkle.merkle_tree import build_merkle_tree
from core.schemas.errors import IndexOutOfRangeError


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

DEMO_ELEMENTS = ("John", "Lily", "Roy", "Suzie", "Jane", "kane")


def demo_cmd(args: Namespace) -> int:
    """
    Execute the demo command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config
    tree = build_merkle_tree(DEMO_ELEMENTS, encoding=config.hashing.element_encoding)

    print("elements:")
    for line in tree.describe_elements():
        print(f"  {line}")

    print("\nnodes:")
    for line in tree.describe_nodes():
        print(f"  {line}")

    try:
        proof = get_proof(tree, args.index)
    except IndexOutOfRangeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    print(f"\nproof for index {args.index} ({tree.elements[args.index]}):")
    for sibling in proof:
        print(f"  {to_hex(sibling)}")

    valid = validate_proof(tree, args.index, proof)
    print(f"\nvalid: {str(valid).lower()}")

    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
