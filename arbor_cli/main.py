"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m arbor_cli build ELEMENT... [--file PATH] [--nodes] [--json]
    python -m arbor_cli prove INDEX ELEMENT... [--file PATH] [--out PATH] [--binary-out PATH] [--json]
    python -m arbor_cli verify --proof PATH [--element E] [--json]
    python -m arbor_cli verify --root HEX --index N --element E [--sibling HEX ...] [--binary-proof PATH]
    python -m arbor_cli demo [--index N]
    python -m arbor_cli config --init

Environment Variables:
    ARBOR_LOG_LEVEL             Log level (default: INFO)
    ARBOR_LOG_FILE              Additional log file
    ARBOR_OUTPUT_FORMAT         Output format: human, json
    ARBOR_SHOW_NODES            Print the node arena after builds
    ARBOR_ELEMENT_ENCODING      Text encoding for elements (default: utf-8)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from arbor_cli import __version__
from arbor_cli.commands import build, prove, verify, demo
from arbor_cli.config import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_element_args(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "elements",
        nargs="*",
        help="Elements in order",
    )
    subparser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="File with one element per line (appended after positional elements)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="arbor",
        description="Arbor CLI - Build Merkle trees, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./arbor.json or ~/.config/arbor/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a tree and print its root",
        description="Build a Merkle tree over the given elements.",
    )
    _add_element_args(build_parser)
    build_parser.add_argument(
        "--nodes",
        action="store_true",
        default=False,
        help="Also print every node of the arena",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for one element",
        description="Build the tree and emit the inclusion proof for INDEX.",
    )
    prove_parser.add_argument(
        "index",
        type=int,
        help="0-based index of the element to prove",
    )
    _add_element_args(prove_parser)
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the JSON proof envelope to this path",
    )
    prove_parser.add_argument(
        "--binary-out",
        type=str,
        default=None,
        help="Write the sibling digests in binary form to this path",
    )
    prove_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output the JSON proof envelope",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof offline",
        description="Recompute the root from a leaf and its proof and compare.",
    )
    verify_parser.add_argument(
        "--proof", "-p",
        type=str,
        default=None,
        help="Path to a JSON proof envelope",
    )
    verify_parser.add_argument(
        "--element", "-e",
        type=str,
        default=None,
        help="Element claimed to be included",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Root digest (0x-prefixed hex), when no envelope is given",
    )
    verify_parser.add_argument(
        "--index",
        type=int,
        default=None,
        help="Claimed element index, when no envelope is given",
    )
    verify_parser.add_argument(
        "--sibling",
        type=str,
        action="append",
        default=None,
        help="Sibling digest (0x-prefixed hex), bottom-up; repeatable",
    )
    verify_parser.add_argument(
        "--binary-proof",
        type=str,
        default=None,
        help="Path to a binary proof instead of --sibling values",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- demo command ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Run the build, prove and validate walkthrough",
    )
    demo_parser.add_argument(
        "--index",
        type=int,
        default=2,
        help="Element index to prove (default: 2)",
    )
    demo_parser.set_defaults(func=demo.demo_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="arbor.json",
        help="Path for config file (default: arbor.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (ARBOR_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Use --init to create a config file or --show to display current config")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.log_level == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
