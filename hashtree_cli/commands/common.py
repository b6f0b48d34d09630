"""
Shared helpers for CLI commands: exit codes, block input and builder setup.
"""

from __future__ import annotations

import logging
import sys
from argparse import ArgumentParser, Namespace
from dataclasses import replace
from pathlib import Path

from hashtree.config import TreeConfig
from hashtree.crypto.hashing import available_hash_algorithms
from hashtree.merkle import DIGEST_ENCODINGS, TreeBuilder


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


class BlockInputError(Exception):
    """Raised when no blocks could be read from the command line."""


def add_block_arguments(parser: ArgumentParser) -> None:
    """Add block input and tree option arguments to a subcommand parser."""
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="Files to use as blocks, one block per file, in order",
    )
    parser.add_argument(
        "--lines", "-l",
        type=str,
        default=None,
        help="Read one block per line from this file ('-' for stdin)",
    )
    parser.add_argument(
        "--text", "-t",
        action="append",
        default=None,
        help="Use TEXT (UTF-8) as a block; may be repeated",
    )
    parser.add_argument(
        "--algorithm", "-a",
        type=str,
        default=None,
        choices=available_hash_algorithms(),
        help="Hash algorithm (overrides config)",
    )
    parser.add_argument(
        "--encoding",
        type=str,
        default=None,
        choices=list(DIGEST_ENCODINGS),
        help="Digest encoding for parent hashing (overrides config)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Show tracebacks on errors",
    )


def read_blocks(args: Namespace) -> list[bytes]:
    """
    Collect blocks from --text, files and --lines, in that order.

    Raises:
        BlockInputError: If no input source was given
        OSError: If a file cannot be read
    """
    blocks: list[bytes] = []
    sources = 0

    if args.text:
        sources += 1
        blocks.extend(text.encode("utf-8") for text in args.text)

    for path in args.files:
        sources += 1
        logger.debug(f"Reading block from {path}")
        blocks.append(path.read_bytes())

    if args.lines:
        sources += 1
        if args.lines == "-":
            raw = sys.stdin.buffer.read()
        else:
            raw = Path(args.lines).read_bytes()
        blocks.extend(raw.splitlines())

    if sources == 0:
        raise BlockInputError("No blocks given: pass FILES, --lines PATH or --text TEXT")

    logger.info(f"Read {len(blocks)} blocks")
    return blocks


def resolve_tree_config(args: Namespace) -> TreeConfig:
    """Tree config from the loaded CLI config, with command-line overrides."""
    cli_config = getattr(args, "cli_config", None)
    config = cli_config.tree if cli_config is not None else TreeConfig()

    if args.algorithm:
        config = replace(config, hash_algorithm=args.algorithm)
    if args.encoding:
        config = replace(config, digest_encoding=args.encoding)

    return config.validate()


def make_builder(args: Namespace, retain_structure: bool | None = None) -> TreeBuilder:
    """Create the TreeBuilder a command should use."""
    config = resolve_tree_config(args)
    if retain_structure is not None:
        config = replace(config, retain_structure=retain_structure)
    return TreeBuilder.from_config(config)


def wants_json(args: Namespace) -> bool:
    """True if --json was given or the config defaults to JSON output."""
    if args.json:
        return True
    cli_config = getattr(args, "cli_config", None)
    return cli_config is not None and cli_config.default_output_format == "json"
