"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m hashtree_cli build [FILES...] [--lines PATH] [--text TEXT]... [--json]
    python -m hashtree_cli verify --root HEX [FILES...] [--lines PATH] [--json]
    python -m hashtree_cli show [FILES...] [--lines PATH] [--json]
    python -m hashtree_cli config --init

Environment Variables:
    HASHTREE_HASH_ALGORITHM     Hash algorithm (default: sha256)
    HASHTREE_DIGEST_ENCODING    Digest encoding: binary or hex (default: binary)
    HASHTREE_RETAIN_STRUCTURE   Keep node structure after build (default: true)
    HASHTREE_LOG_LEVEL          Log level (default: WARNING)
    HASHTREE_LOG_FILE           Also log to this file
    HASHTREE_OUTPUT_FORMAT      Default output format: human or json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from hashtree_cli import __version__
from hashtree_cli.commands import build, show, verify
from hashtree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    add_block_arguments,
)
from hashtree_cli.config import get_default_config_template, load_config


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="hashtree",
        description="hashtree CLI - Build, inspect and verify Merkle roots over ordered blocks.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./hashtree.json or ~/.config/hashtree/config.json)",
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
        help="Build a Merkle tree and print its root",
        description="Hash the given blocks, reduce them pairwise and print the root digest.",
    )
    add_block_arguments(build_parser)
    build_parser.set_defaults(func=build.build_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify blocks against an expected root",
        description="Recompute the root of the given blocks and compare it with --root.",
    )
    verify_parser.add_argument(
        "--root", "-r",
        type=str,
        required=True,
        help="Expected root as 0x-prefixed hex",
    )
    add_block_arguments(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- show command ---
    show_parser = subparsers.add_parser(
        "show",
        help="Print every level of the tree",
        description="Print node digests level by level, leaves first, marking parity padding.",
    )
    add_block_arguments(show_parser)
    show_parser.set_defaults(func=show.show_cmd)

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
        default="hashtree.json",
        help="Path for config file (default: hashtree.json)",
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
        print("You can also use environment variables (HASHTREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = args.cli_config
        config_dict = {
            "tree": config.tree.to_dict(),
            "log_level": config.log_level,
            "log_file": config.log_file,
            "default_output_format": config.default_output_format,
        }
        print(json.dumps(config_dict, indent=2))
        return EXIT_SUCCESS

    print("Usage: hashtree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
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

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
