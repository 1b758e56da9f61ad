"""
CLI Verify Command

Verify an inclusion proof offline against a root digest.

Usage:
    arbor verify --proof proof.json [--element Roy] [--json]
    arbor verify --root 0x... --index 2 --element Roy --sibling 0x... --sibling 0x...
    arbor verify --root 0x... --index 2 --element Roy --binary-proof proof.bin
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.crypto.hashing import digest_from_hex, to_hex
from core.merkle.merkle_proofs import verify_proof
from core.merkle.proof_format import InclusionProof, decode_proof
from core.schemas.errors import MerkleException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    index: int = 0
    root: str = ""
    proof_length: int = 0
    element_checked: bool = False
    valid: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def verify_envelope(path: Path, element: str | None, encoding: str) -> VerifySummary:
    """
    Verify a JSON proof envelope, optionally binding it to an element.

    Raises:
        ValidationError: If the envelope is malformed
        OSError: If the file cannot be read
    """
    proof = InclusionProof.model_validate_json(path.read_text(encoding="utf-8"))
    if element is not None:
        valid = proof.verify_element(element, encoding)
    else:
        valid = proof.verify()
    return VerifySummary(
        index=proof.index,
        root=proof.root,
        proof_length=len(proof.siblings),
        element_checked=element is not None,
        valid=valid,
    )


def verify_components(args: Namespace, encoding: str) -> VerifySummary:
    """
    Verify a proof given as separate root, index, element and siblings.

    Raises:
        ValueError: If a digest is malformed or a required argument is missing
        MerkleException: If the binary proof cannot be decoded or the
            index is negative
    """
    if args.root is None or args.index is None or args.element is None:
        raise ValueError("--root, --index and --element are required without --proof")

    root = digest_from_hex(args.root)
    if args.binary_proof:
        siblings = decode_proof(Path(args.binary_proof).read_bytes())
    else:
        siblings = [digest_from_hex(s) for s in (args.sibling or [])]

    valid = verify_proof(args.element, args.index, siblings, root, encoding=encoding)
    return VerifySummary(
        index=args.index,
        root=to_hex(root),
        proof_length=len(siblings),
        element_checked=True,
        valid=valid,
    )


def component_flags(args: Namespace) -> list[str]:
    """Flags given that only apply when verifying from separate components."""
    given = []
    if args.root is not None:
        given.append("--root")
    if args.index is not None:
        given.append("--index")
    if args.sibling:
        given.append("--sibling")
    if args.binary_proof:
        given.append("--binary-proof")
    return given


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"index: {summary.index}")
    print(f"root: {summary.root}")
    print(f"proof_length: {summary.proof_length}")
    print(f"element_checked: {str(summary.element_checked).lower()}")
    print(f"valid: {str(summary.valid).lower()}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config
    encoding = config.hashing.element_encoding
    output_json = args.json or config.output.format == "json"

    if args.proof:
        mixed = component_flags(args)
        if mixed:
            print(
                f"Error: --proof cannot be combined with {', '.join(mixed)}",
                file=sys.stderr,
            )
            return EXIT_RUNTIME_ERROR

    try:
        if args.proof:
            summary = verify_envelope(Path(args.proof), args.element, encoding)
        else:
            summary = verify_components(args, encoding)
    except ValidationError as e:
        print(f"Error: invalid proof envelope: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (MerkleException, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if output_json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.valid:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
