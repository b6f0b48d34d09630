"""
CLI Verify Command

Re-derive the root of a set of blocks and compare it with an expected root.

Usage:
    hashtree verify --root 0x... a.txt b.txt c.txt [--json] [--debug]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from hashtree.merkle import verify_root
from hashtree.schemas.errors import DigestFormatException
from hashtree.schemas.verification import VerificationResult

from hashtree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    BlockInputError,
    make_builder,
    read_blocks,
    wants_json,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of root verification for CLI output."""
    expected_root: str = ""
    computed_root: str = ""
    leaf_count: int = 0
    ok: bool = False
    checks: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["errors"]:
            del d["errors"]
        return d


def build_summary(result: VerificationResult, leaf_count: int) -> VerifySummary:
    """Build a VerifySummary from a verification result."""
    root_check = result.checks[0]
    summary = VerifySummary(
        expected_root=root_check.details.get("expected", ""),
        computed_root=root_check.details.get("actual", ""),
        leaf_count=leaf_count,
        ok=result.ok,
        checks=[
            {"check_id": c.check_id, "ok": c.ok, "message": c.message}
            for c in result.checks
        ],
    )
    summary.errors = result.get_error_messages()
    return summary


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"expected: {summary.expected_root}")
    print(f"computed: {summary.computed_root}")
    print(f"leaves: {summary.leaf_count}")
    print(f"ok: {str(summary.ok).lower()}")

    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors:
            print(f"  ✗ {err}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

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

    try:
        result = verify_root(blocks, args.root, builder)
    except DigestFormatException as e:
        print(f"Error: invalid --root: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = build_summary(result, len(blocks))

    if wants_json(args):
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
