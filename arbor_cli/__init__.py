"""
Arbor CLI

Command-line interface for building Merkle trees and checking inclusion proofs.

Usage:
    python -m arbor_cli build John Lily Roy --nodes
    python -m arbor_cli prove 2 John Lily Roy --out proof.json
    python -m arbor_cli verify --proof proof.json --element Roy
    python -m arbor_cli demo
"""

__version__ = "0.1.0"
