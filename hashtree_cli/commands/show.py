"""
CLI Show Command

Print every level of a Merkle tree, leaves first, marking parity padding.

Usage:
    hashtree show --text Tx1 --text Tx2 --text Tx3
    hashtree show a.txt b.txt c.txt --json
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from typing import Any

from hashtree.crypto.hashing import to_hex
from hashtree.merkle import MerkleTree

from hashtree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    BlockInputError,
    make_builder,
    read_blocks,
    wants_json,
)


def describe_levels(tree: MerkleTree) -> list[dict[str, Any]]:
    """
    Describe each level of a tree for display.

    A node is marked as padding when it sits past the number of real
    nodes on its level (leaf_count at level 0, then ceil(n / 2) upward).
    """
    described: list[dict[str, Any]] = []
    real = tree.leaf_count()
    for index, level in enumerate(tree.levels()):
        nodes = [
            {"digest": to_hex(node.digest), "padding": position >= real}
            for position, node in enumerate(level)
        ]
        described.append({"level": index, "nodes": nodes})
        real = (real + 1) // 2
    return described


def print_levels_human(tree: MerkleTree, levels: list[dict[str, Any]]) -> None:
    """Print levels in human-readable format."""
    if not levels:
        print(f"(empty tree) root: {tree.root_hex()}")
        return

    for level in levels:
        print(f"level {level['level']} ({len(level['nodes'])} nodes):")
        for node in level["nodes"]:
            marker = "  [padding]" if node["padding"] else ""
            print(f"  {node['digest']}{marker}")
    print(f"\nroot: {tree.root_hex()}")


def show_cmd(args: Namespace) -> int:
    """
    Execute the show command.

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

    tree = make_builder(args, retain_structure=True).build(blocks)
    levels = describe_levels(tree)

    if wants_json(args):
        print(json.dumps({"root": tree.root_hex(), "levels": levels}, indent=2))
    else:
        print_levels_human(tree, levels)

    return EXIT_SUCCESS
