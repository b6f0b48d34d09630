"""
CLI Build Command

Build a Merkle tree from blocks and print its root.

Usage:
    hashtree build a.txt b.txt c.txt [--algorithm sha256] [--json]
    hashtree build --lines transactions.txt
    hashtree build --text Tx1 --text Tx2 --text Tx3 --encoding hex
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass

from hashtree.merkle import MerkleTree, TreeBuilder

from hashtree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    BlockInputError,
    make_builder,
    read_blocks,
    wants_json,
)


logger = logging.getLogger(__name__)


@dataclass
class BuildSummary:
    """Summary of a tree build for CLI output."""
    root: str = ""
    leaf_count: int = 0
    depth: int = 0
    algorithm: str = ""
    encoding: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


def build_summary(tree: MerkleTree, builder: TreeBuilder) -> BuildSummary:
    """Build a BuildSummary from a tree."""
    return BuildSummary(
        root=tree.root_hex(),
        leaf_count=tree.leaf_count(),
        depth=tree.depth(),
        algorithm=builder.algorithm_name,
        encoding=builder.digest_encoding,
    )


def print_summary_human(summary: BuildSummary) -> None:
    """Print summary in human-readable format."""
    print(f"root: {summary.root}")
    print(f"leaves: {summary.leaf_count}")
    print(f"depth: {summary.depth}")
    print(f"algorithm: {summary.algorithm}")
    print(f"encoding: {summary.encoding}")


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        blocks = read_blocks(args)
    except (BlockInputError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    builder = make_builder(args, retain_structure=False)
    tree = builder.build(blocks)
    summary = build_summary(tree, builder)
    logger.info(f"Built tree over {summary.leaf_count} blocks, root {summary.root}")

    if wants_json(args):
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS
