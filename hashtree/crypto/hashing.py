"""
Hashing Utilities
Hash primitives, the named hash function registry and hex helpers.

This module provides:
- SHA-256 hashing for raw bytes (the default tree hash function)
- A registry of named hash functions usable as the tree's hash primitive
- Hex encoding/decoding with 0x prefix

Any callable taking bytes and returning bytes can serve as a tree hash
function. The registry only names the ones shipped with the library.

Determinism Notes:
- Always hash raw bytes exactly as given
- Registered functions are pure: no state survives between calls
"""
from __future__ import annotations

import hashlib
from typing import Callable

from hashtree.schemas.errors import DigestFormatException, UnknownHashAlgorithmException


HashFunction = Callable[[bytes], bytes]

DEFAULT_HASH_ALGORITHM = "sha256"


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def sha512(data: bytes) -> bytes:
    """Compute SHA-512 hash of raw bytes (64-byte digest)."""
    return hashlib.sha512(data).digest()


def sha3_256(data: bytes) -> bytes:
    """Compute SHA3-256 hash of raw bytes (32-byte digest)."""
    return hashlib.sha3_256(data).digest()


def blake2b_256(data: bytes) -> bytes:
    """Compute BLAKE2b hash of raw bytes truncated to a 32-byte digest."""
    return hashlib.blake2b(data, digest_size=32).digest()


_HASH_FUNCTIONS: dict[str, HashFunction] = {
    "sha256": sha256,
    "sha512": sha512,
    "sha3_256": sha3_256,
    "blake2b": blake2b_256,
}


def available_hash_algorithms() -> list[str]:
    """Names accepted by get_hash_function(), sorted."""
    return sorted(_HASH_FUNCTIONS)


def hash_algorithm_name(hash_function: HashFunction) -> str:
    """
    Registry name of a hash function.

    Falls back to the function's __name__ for functions that were
    injected directly and never registered.
    """
    for name, registered in _HASH_FUNCTIONS.items():
        if registered is hash_function:
            return name
    return getattr(hash_function, "__name__", repr(hash_function))


def get_hash_function(name: str) -> HashFunction:
    """
    Look up a registered hash function by name.

    Names are case-insensitive and "-" is treated as "_"
    (so "SHA3-256" resolves to "sha3_256").

    Args:
        name: Algorithm name

    Returns:
        The hash function

    Raises:
        UnknownHashAlgorithmException: If no function is registered under name
    """
    key = name.strip().lower().replace("-", "_")
    try:
        return _HASH_FUNCTIONS[key]
    except KeyError:
        raise UnknownHashAlgorithmException(
            algorithm=name,
            available=available_hash_algorithms(),
        ) from None


def hash_concat(left: bytes, right: bytes, hash_function: HashFunction = sha256) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    This is the binary form of the Merkle parent rule:
    parent = hash(left + right)

    Args:
        left: Left child digest
        right: Right child digest
        hash_function: Hash primitive (default sha256)

    Returns:
        Digest of the concatenation
    """
    return hash_function(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        DigestFormatException: If string doesn't start with 0x, has odd length,
                               or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise DigestFormatException(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}...",
            value=hex_string,
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise DigestFormatException(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}",
            value=hex_string,
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise DigestFormatException(
            f"Invalid hex characters in string: {e}",
            value=hex_string,
        ) from e


__all__ = [
    "HashFunction",
    "DEFAULT_HASH_ALGORITHM",
    "sha256",
    "sha512",
    "sha3_256",
    "blake2b_256",
    "available_hash_algorithms",
    "get_hash_function",
    "hash_algorithm_name",
    "hash_concat",
    "to_hex",
    "from_hex",
]
