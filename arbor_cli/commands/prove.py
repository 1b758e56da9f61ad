"""
CLI Prove Command

Generate an inclusion proof for one element.

Usage:
    arbor prove 2 John Lily Roy [--out proof.json] [--binary-out proof.bin] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from core.merkle.merkle_tree import build_merkle_tree
from core.merkle.proof_format import InclusionProof
from core.schemas.errors import MerkleException

from arbor_cli.commands.build import read_elements


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def print_proof_human(proof: InclusionProof) -> None:
    """Print a proof in human-readable format."""
    print(f"index: {proof.index}")
    print(f"element_count: {proof.element_count}")
    print(f"leaf: {proof.leaf}")
    print(f"siblings ({len(proof.siblings)}):")
    for level, sibling in enumerate(proof.siblings):
        print(f"  {level} {sibling}")
    print(f"root: {proof.root}")


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config
    output_json = args.json or config.output.format == "json"

    try:
        elements = read_elements(args.elements, args.file)
    except OSError as e:
        print(f"Error reading elements: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        tree = build_merkle_tree(elements, encoding=config.hashing.element_encoding)
        proof = InclusionProof.from_tree(tree, args.index)
    except MerkleException as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.out:
        Path(args.out).write_text(proof.model_dump_json(indent=2) + "\n", encoding="utf-8")
        logger.info(f"Wrote proof envelope to {args.out}")
    if args.binary_out:
        Path(args.binary_out).write_bytes(proof.to_binary())
        logger.info(f"Wrote binary proof to {args.binary_out}")

    if output_json:
        print(proof.model_dump_json(indent=2))
    else:
        print_proof_human(proof)

    return EXIT_SUCCESS
