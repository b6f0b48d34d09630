"""
Root Verification
Re-derive a Merkle root from blocks and compare it with an expected root.

Results are reported as VerificationResult so callers (the CLI in
particular) can print every check, while require_root() offers the raising
form for code that prefers exceptions.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from hashtree.crypto.hashing import from_hex, to_hex
from hashtree.merkle.merkle_tree import Block, MerkleTree, TreeBuilder
from hashtree.schemas.errors import ErrorCodes, HashTreeError, RootMismatchException
from hashtree.schemas.verification import CheckResult, VerificationResult


logger = logging.getLogger(__name__)

RootLike = Union[bytes, str]


def _as_digest(root: RootLike) -> bytes:
    if isinstance(root, str):
        return from_hex(root)
    return bytes(root)


def _root_check(expected: bytes, actual: bytes) -> CheckResult:
    details = {"expected": to_hex(expected), "actual": to_hex(actual)}
    if expected == actual:
        return CheckResult.passed("root_match", "Recomputed root matches", details)
    return CheckResult.failed(
        "root_match",
        f"Root mismatch: expected {details['expected']}, computed {details['actual']}",
        details,
    )


def _mismatch_error(check: CheckResult) -> HashTreeError:
    return HashTreeError(
        code=ErrorCodes.ROOT_MISMATCH,
        message=check.message,
        details=check.details,
    )


def verify_root(
    blocks: Iterable[Block],
    expected_root: RootLike,
    builder: Optional[TreeBuilder] = None,
) -> VerificationResult:
    """
    Verify that blocks commit to expected_root.

    Args:
        blocks: Ordered blocks to re-derive the root from
        expected_root: Root digest as bytes or 0x-prefixed hex
        builder: TreeBuilder to use (default sha256, binary encoding)

    Returns:
        VerificationResult with a single "root_match" check

    Raises:
        DigestFormatException: If expected_root is a malformed hex string
    """
    builder = builder or TreeBuilder()
    expected = _as_digest(expected_root)
    actual = builder.compute_root(blocks)

    check = _root_check(expected, actual)
    if check.ok:
        logger.info(f"Root verified: {check.details['actual']}")
        return VerificationResult.success([check])

    logger.warning(check.message)
    return VerificationResult.failure([check], error=_mismatch_error(check))


def verify_tree(tree: MerkleTree) -> VerificationResult:
    """
    Verify a MerkleTree against its own retained leaves.

    Checks:
    - leaf_count: root presence agrees with leaf presence
    - root_match: root recomputed from the leaves equals the stored root
    """
    result = VerificationResult.success()

    has_leaves = tree.leaf_count() > 0
    if has_leaves == (not tree.is_empty):
        result.add_check(CheckResult.passed(
            "leaf_count",
            f"Tree has {tree.leaf_count()} leaves",
            {"leaf_count": tree.leaf_count()},
        ))
    else:
        result.add_check(CheckResult.failed(
            "leaf_count",
            "Root presence does not match leaf presence",
            {"leaf_count": tree.leaf_count(), "has_root": not tree.is_empty},
        ))
        result.error = HashTreeError(
            code=ErrorCodes.LEAF_COUNT_MISMATCH,
            message="Root presence does not match leaf presence",
        )

    check = _root_check(tree.root_digest(), tree.builder.compute_root(tree.leaves))
    result.add_check(check)
    if not check.ok and result.error is None:
        result.error = _mismatch_error(check)

    return result


def require_root(
    blocks: Iterable[Block],
    expected_root: RootLike,
    builder: Optional[TreeBuilder] = None,
) -> bytes:
    """
    Raising form of verify_root().

    Returns:
        The verified root digest

    Raises:
        RootMismatchException: If the recomputed root differs
        DigestFormatException: If expected_root is a malformed hex string
    """
    builder = builder or TreeBuilder()
    expected = _as_digest(expected_root)
    actual = builder.compute_root(blocks)
    if actual != expected:
        raise RootMismatchException(expected=to_hex(expected), actual=to_hex(actual))
    return actual


__all__ = [
    "RootLike",
    "require_root",
    "verify_root",
    "verify_tree",
]
