"""
Core cryptographic utilities.

Hash primitives used as the tree's injected hash function.
"""
from .hashing import (
    DEFAULT_HASH_ALGORITHM,
    HashFunction,
    available_hash_algorithms,
    blake2b_256,
    from_hex,
    get_hash_function,
    hash_algorithm_name,
    hash_concat,
    sha256,
    sha3_256,
    sha512,
    to_hex,
)

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "HashFunction",
    "available_hash_algorithms",
    "blake2b_256",
    "from_hex",
    "get_hash_function",
    "hash_algorithm_name",
    "hash_concat",
    "sha256",
    "sha3_256",
    "sha512",
    "to_hex",
]
