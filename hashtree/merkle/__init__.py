"""
Merkle Tree and Commitments
Deterministic Merkle tree construction and root verification.

This module provides:
- TreeBuilder: Build a MerkleTree from ordered blocks
- MerkleTree: Immutable tree value (root digest, leaves, shape)
- Leaf / Internal: Node variants
- verify_root / verify_tree: Re-derive and compare roots

Canonical Commitment Rules:
1. Leaf hashing: hash(block)
2. Parent hashing: hash(left + right)
3. Padding: Duplicate last node if odd number at any level
4. Empty tree: hash(b"")
5. Single leaf: root = leaf

Usage:
    from hashtree.merkle import TreeBuilder, verify_root

    tree = TreeBuilder().build([b"Tx1", b"Tx2", b"Tx3"])
    root = tree.root_digest()

    assert verify_root([b"Tx1", b"Tx2", b"Tx3"], root).ok
"""
from .nodes import (
    DIGEST_ENCODINGS,
    DigestEncoding,
    Internal,
    Leaf,
    Node,
    combine_digests,
)

from .merkle_tree import (
    EMPTY_TREE_ROOT,
    Block,
    MerkleTree,
    TreeBuilder,
    build_merkle_root,
    compute_tree_depth,
    merkle_parent,
)

from .verify import (
    require_root,
    verify_root,
    verify_tree,
)


__all__ = [
    # Core types
    "Block",
    "DigestEncoding",
    "DIGEST_ENCODINGS",
    "EMPTY_TREE_ROOT",
    "Internal",
    "Leaf",
    "MerkleTree",
    "Node",
    "TreeBuilder",
    # Core functions
    "build_merkle_root",
    "combine_digests",
    "compute_tree_depth",
    "merkle_parent",
    # Verification
    "require_root",
    "verify_root",
    "verify_tree",
]
