"""
Merkle Tree Implementation
Deterministic bottom-up Merkle tree construction and post-build accessors.

This module provides:
- TreeBuilder: turns an ordered sequence of blocks into a MerkleTree
- MerkleTree: immutable result (root, retained leaves, shape accessors)
- Functional helpers over pre-hashed leaf digests

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = hash(block)
2. Parent hashing: parent = hash(encode(left) + encode(right))
3. Padding rule: Duplicate last node if odd number at any level
4. Empty tree: root_digest() is hash(b"") under the tree's hash function
5. Single leaf: root = leaf (the leaf hash itself)

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts leaves - it trusts input order
- Failures raised by the hash function propagate; no partial tree is returned
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional, Sequence, Union

from hashtree.crypto.hashing import (
    HashFunction,
    get_hash_function,
    hash_algorithm_name,
    sha256,
    to_hex,
)
from hashtree.merkle.nodes import (
    DIGEST_ENCODINGS,
    DigestEncoding,
    Internal,
    Node,
    combine_digests,
    duplicate_node,
    make_internal,
    make_leaf,
)
from hashtree.schemas.errors import ConfigurationException, StructureNotRetainedException

if TYPE_CHECKING:
    from hashtree.config.runtime import TreeConfig


logger = logging.getLogger(__name__)


# Empty tree sentinel for the default hash function: sha256 of empty bytes
EMPTY_TREE_ROOT: bytes = sha256(b"")

Block = Union[bytes, bytearray, memoryview, str]


def _coerce_block(block: Block, index: int) -> bytes:
    if isinstance(block, bytes):
        return block
    if isinstance(block, (bytearray, memoryview)):
        return bytes(block)
    if isinstance(block, str):
        return block.encode("utf-8")
    raise TypeError(
        f"Block {index} must be bytes or str, got {type(block).__name__}"
    )


def merkle_parent(
    left: bytes,
    right: bytes,
    hash_function: HashFunction = sha256,
    digest_encoding: DigestEncoding = "binary",
) -> bytes:
    """
    Compute the parent hash of two child digests.

    Args:
        left: Left child digest
        right: Right child digest
        hash_function: Hash primitive (default sha256)
        digest_encoding: "binary" or "hex"

    Returns:
        Parent digest
    """
    return combine_digests(left, right, hash_function, digest_encoding)


def build_merkle_root(
    leaves: Sequence[bytes],
    hash_function: HashFunction = sha256,
    digest_encoding: DigestEncoding = "binary",
) -> bytes:
    """
    Build a Merkle root from a sequence of leaf digests.

    Algorithm:
    1. If empty: return hash(b"")
    2. If single leaf: return the leaf itself
    3. Otherwise, iteratively build levels:
       - If odd number of nodes, duplicate the last node
       - Pair adjacent nodes and compute parent hashes
       - Repeat until single root remains

    Padding Rule: Duplicate last node at each level if odd.
    Example: [a, b, c] -> [a, b, c, c] -> [parent(a,b), parent(c,c)]

    Args:
        leaves: Sequence of leaf digests. Order matters and is preserved.
        hash_function: Hash primitive (default sha256)
        digest_encoding: "binary" or "hex"

    Returns:
        Merkle root digest
    """
    if len(leaves) == 0:
        return hash_function(b"")

    if len(leaves) == 1:
        return leaves[0]

    current_level: list[bytes] = list(leaves)

    while len(current_level) > 1:
        if len(current_level) % 2 == 1:
            current_level.append(current_level[-1])

        next_level: list[bytes] = []
        for i in range(0, len(current_level), 2):
            parent = merkle_parent(
                current_level[i], current_level[i + 1], hash_function, digest_encoding
            )
            next_level.append(parent)

        current_level = next_level

    return current_level[0]


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of levels from leaves to root (inclusive).
    A single leaf has depth 1, two leaves have depth 2, etc.

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves == 0:
        return 0
    if num_leaves == 1:
        return 1

    depth = 1
    n = num_leaves
    while n > 1:
        # Account for padding
        if n % 2 == 1:
            n += 1
        n = n // 2
        depth += 1

    return depth


@dataclass(frozen=True)
class TreeBuilder:
    """
    Builds MerkleTree values from ordered blocks.

    A builder holds no state between builds, so one instance can be shared
    freely, including across threads.

    Attributes:
        hash_function: Injected hash primitive, bytes -> digest
        digest_encoding: How child digests are joined in the parent rule
        retain_structure: Keep the node structure (True) or only the root digest
    """
    hash_function: HashFunction = sha256
    digest_encoding: DigestEncoding = "binary"
    retain_structure: bool = True

    def __post_init__(self) -> None:
        if self.digest_encoding not in DIGEST_ENCODINGS:
            raise ConfigurationException(
                f"Unknown digest encoding: {self.digest_encoding!r}",
                field_path="digest_encoding",
                details={"allowed": list(DIGEST_ENCODINGS)},
            )

    @classmethod
    def from_config(cls, config: "TreeConfig") -> "TreeBuilder":
        """Create a builder from a TreeConfig."""
        return cls(
            hash_function=get_hash_function(config.hash_algorithm),
            digest_encoding=config.digest_encoding,
            retain_structure=config.retain_structure,
        )

    @property
    def algorithm_name(self) -> str:
        """Registry name of the hash function, e.g. "blake2b"."""
        return hash_algorithm_name(self.hash_function)

    def empty_root(self) -> bytes:
        """Sentinel digest reported by trees with no leaves."""
        return self.hash_function(b"")

    def build(self, blocks: Iterable[Block]) -> "MerkleTree":
        """
        Build a Merkle tree from ordered blocks.

        Args:
            blocks: Finite iterable of bytes-like or str blocks (str is UTF-8 encoded)

        Returns:
            MerkleTree whose leaves equal the input, in order

        Raises:
            TypeError: If a block is not bytes-like or str
        """
        data = tuple(_coerce_block(block, i) for i, block in enumerate(blocks))

        if not data:
            logger.debug("Built empty Merkle tree")
            return MerkleTree(leaves=(), root=None, root_hash=None, builder=self)

        if self.retain_structure:
            root: Optional[Node] = self._reduce([make_leaf(b, self.hash_function) for b in data])
            root_hash = root.digest
        else:
            root = None
            root_hash = self.compute_root(data)

        logger.debug(
            f"Built Merkle tree: leaves={len(data)} depth={compute_tree_depth(len(data))} "
            f"algorithm={self.algorithm_name} encoding={self.digest_encoding}"
        )
        return MerkleTree(leaves=data, root=root, root_hash=root_hash, builder=self)

    def compute_root(self, blocks: Iterable[Block]) -> bytes:
        """
        Compute only the root digest of blocks, without building nodes.

        Returns the empty-tree sentinel for empty input.
        """
        digests = [
            self.hash_function(_coerce_block(block, i)) for i, block in enumerate(blocks)
        ]
        return build_merkle_root(digests, self.hash_function, self.digest_encoding)

    def _reduce(self, level: list[Node]) -> Node:
        while len(level) > 1:
            if len(level) % 2 == 1:
                level = level + [duplicate_node(level[-1])]

            pairs = iter(level)
            level = [
                make_internal(left, right, self.hash_function, self.digest_encoding)
                for left, right in zip(pairs, pairs)
            ]

        return level[0]


@dataclass(frozen=True)
class MerkleTree:
    """
    An immutable Merkle tree.

    Attributes:
        leaves: Original input blocks, in order (no padding). str blocks
            are stored as their UTF-8 bytes.
        root: Root node, or None when empty or built without structure
        root_hash: Root digest, or None when empty
        builder: The TreeBuilder that produced this tree
    """
    leaves: tuple[bytes, ...]
    root: Optional[Node] = field(repr=False)
    root_hash: Optional[bytes]
    builder: TreeBuilder = field(repr=False)

    @property
    def is_empty(self) -> bool:
        return self.root_hash is None

    @property
    def has_structure(self) -> bool:
        return self.root is not None

    def root_digest(self) -> bytes:
        """Root digest, or the empty-tree sentinel hash(b"") when there are no leaves."""
        if self.root_hash is None:
            return self.builder.empty_root()
        return self.root_hash

    def root_hex(self) -> str:
        """Root digest as 0x-prefixed hex."""
        return to_hex(self.root_digest())

    def leaf_count(self) -> int:
        """Number of original blocks, not counting parity padding."""
        return len(self.leaves)

    def depth(self) -> int:
        """Levels from leaves to root inclusive, counting padding."""
        return compute_tree_depth(len(self.leaves))

    def levels(self) -> list[list[Node]]:
        """
        Nodes grouped by level, leaves first and root last.

        Padding copies appear where the parity rule added them, so the
        result shows the full shape of the tree.

        Raises:
            StructureNotRetainedException: If built with retain_structure=False
        """
        if self.is_empty:
            return []
        if self.root is None:
            raise StructureNotRetainedException()

        top_down: list[list[Node]] = []
        level: list[Node] = [self.root]
        while level:
            top_down.append(level)
            level = [
                child
                for node in level
                if isinstance(node, Internal)
                for child in (node.left, node.right)
            ]

        top_down.reverse()
        return top_down

    def verify(self) -> bool:
        """Recompute the root from the retained leaves and compare."""
        return self.builder.compute_root(self.leaves) == self.root_digest()


__all__ = [
    "EMPTY_TREE_ROOT",
    "Block",
    "MerkleTree",
    "TreeBuilder",
    "build_merkle_root",
    "compute_tree_depth",
    "merkle_parent",
]
