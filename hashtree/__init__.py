"""
hashtree

Bottom-up binary Merkle tree builder and verifier.

Usage:
    from hashtree import TreeBuilder

    tree = TreeBuilder().build([b"A", b"B", b"C", b"D"])
    print(tree.root_hex(), tree.leaf_count())
"""

from .config import TreeConfig
from .crypto import get_hash_function, sha256
from .merkle import (
    EMPTY_TREE_ROOT,
    Internal,
    Leaf,
    MerkleTree,
    TreeBuilder,
    verify_root,
    verify_tree,
)
from .schemas import HashTreeException, VerificationResult

__version__ = "0.1.0"

__all__ = [
    "EMPTY_TREE_ROOT",
    "HashTreeException",
    "Internal",
    "Leaf",
    "MerkleTree",
    "TreeBuilder",
    "TreeConfig",
    "VerificationResult",
    "get_hash_function",
    "sha256",
    "verify_root",
    "verify_tree",
]
