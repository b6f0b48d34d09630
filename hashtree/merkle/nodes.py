"""
Merkle Tree Nodes
Leaf and internal node variants plus the parent-digest rule.

Node Rules (Hard Contracts):
1. Leaf digest: hash(block)
2. Internal digest: hash(encode(left.digest) + encode(right.digest))
3. Every Internal node has exactly two children
4. Nodes are frozen; a digest never changes after the node is created

Digest encodings for the parent rule:
- "binary": raw fixed-width digest bytes are concatenated
- "hex": lowercase hex text of each digest is concatenated and the
  ASCII bytes of that text are hashed
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal, Union

from hashtree.crypto.hashing import HashFunction, hash_concat, sha256


DigestEncoding = Literal["binary", "hex"]

DIGEST_ENCODINGS: tuple[str, ...] = ("binary", "hex")


@dataclass(frozen=True)
class Leaf:
    """A node holding the digest of one input block."""
    digest: bytes

    @property
    def is_leaf(self) -> bool:
        return True


@dataclass(frozen=True)
class Internal:
    """
    A node combining exactly two children.

    Attributes:
        digest: hash of the encoded child digests, left first
        left: Left child
        right: Right child
    """
    digest: bytes
    left: "Node"
    right: "Node"

    @property
    def is_leaf(self) -> bool:
        return False


Node = Union[Leaf, Internal]


def encode_digest(digest: bytes, encoding: DigestEncoding = "binary") -> bytes:
    """Encode a digest for concatenation in the parent rule."""
    if encoding == "binary":
        return digest
    if encoding == "hex":
        return digest.hex().encode("ascii")
    raise ValueError(f"Unknown digest encoding: {encoding!r}")


def combine_digests(
    left: bytes,
    right: bytes,
    hash_function: HashFunction = sha256,
    encoding: DigestEncoding = "binary",
) -> bytes:
    """
    Compute a parent digest from two child digests.

    Args:
        left: Left child digest
        right: Right child digest
        hash_function: Hash primitive
        encoding: How child digests are encoded before concatenation

    Returns:
        Parent digest
    """
    return hash_concat(
        encode_digest(left, encoding),
        encode_digest(right, encoding),
        hash_function,
    )


def make_leaf(block: bytes, hash_function: HashFunction = sha256) -> Leaf:
    """Hash a block into a Leaf."""
    return Leaf(digest=hash_function(block))


def make_internal(
    left: Node,
    right: Node,
    hash_function: HashFunction = sha256,
    encoding: DigestEncoding = "binary",
) -> Internal:
    """Create the parent of two nodes, taking both as its children."""
    return Internal(
        digest=combine_digests(left.digest, right.digest, hash_function, encoding),
        left=left,
        right=right,
    )


def duplicate_node(node: Node) -> Node:
    """
    Structural copy of a node for parity padding.

    The copy carries the same digest and children; nothing is re-hashed.
    """
    return replace(node)


__all__ = [
    "DIGEST_ENCODINGS",
    "DigestEncoding",
    "Internal",
    "Leaf",
    "Node",
    "combine_digests",
    "duplicate_node",
    "encode_digest",
    "make_internal",
    "make_leaf",
]
