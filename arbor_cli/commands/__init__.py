"""
CLI command modules.
"""

from arbor_cli.commands import build, prove, verify, demo

__all__ = ["build", "prove", "verify", "demo"]
