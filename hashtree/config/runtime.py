"""
Runtime Configuration

Tree construction settings: hash algorithm, digest encoding and whether
node structure is retained after a build.
"""

from __future__ import annotations

import copy
import os
from dataclasses import asdict, dataclass
from typing import Any

from dotenv import load_dotenv

from hashtree.crypto.hashing import DEFAULT_HASH_ALGORITHM, get_hash_function
from hashtree.merkle.nodes import DIGEST_ENCODINGS
from hashtree.schemas.errors import ConfigurationException, UnknownHashAlgorithmException

load_dotenv()


ENV_PREFIX = "HASHTREE_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationException(
        f"Invalid boolean for {name}: {value!r}",
        field_path=name,
    )


@dataclass
class TreeConfig:
    """
    Configuration for tree construction.

    Can be loaded from:
    - Environment variables (HASHTREE_* prefix, .env supported)
    - A dictionary (e.g. the "tree" section of a JSON config file)
    - Programmatic construction
    """
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    digest_encoding: str = "binary"
    retain_structure: bool = True

    def validate(self) -> "TreeConfig":
        """
        Check that all values are usable.

        Raises:
            ConfigurationException: If the algorithm or encoding is unknown
        """
        for field_name in ("hash_algorithm", "digest_encoding"):
            value = getattr(self, field_name)
            if not isinstance(value, str):
                raise ConfigurationException(
                    f"{field_name} must be a string, got {type(value).__name__}",
                    field_path=field_name,
                )

        try:
            get_hash_function(self.hash_algorithm)
        except UnknownHashAlgorithmException as e:
            raise ConfigurationException(
                e.message,
                field_path="hash_algorithm",
                details=e.details,
            ) from e

        if self.digest_encoding not in DIGEST_ENCODINGS:
            raise ConfigurationException(
                f"Unknown digest encoding: {self.digest_encoding!r}",
                field_path="digest_encoding",
                details={"allowed": list(DIGEST_ENCODINGS)},
            )
        return self

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - HASHTREE_HASH_ALGORITHM: sha256, sha512, sha3_256, blake2b
        - HASHTREE_DIGEST_ENCODING: binary or hex
        - HASHTREE_RETAIN_STRUCTURE: true/false
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides["hash_algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")
        if os.getenv(f"{ENV_PREFIX}DIGEST_ENCODING"):
            overrides["digest_encoding"] = os.getenv(f"{ENV_PREFIX}DIGEST_ENCODING")
        if os.getenv(f"{ENV_PREFIX}RETAIN_STRUCTURE"):
            overrides["retain_structure"] = _parse_bool(
                f"{ENV_PREFIX}RETAIN_STRUCTURE",
                os.getenv(f"{ENV_PREFIX}RETAIN_STRUCTURE", "true"),
            )

        return overrides

    @classmethod
    def from_env(cls) -> "TreeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TreeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        unknown = set(data) - {"hash_algorithm", "digest_encoding", "retain_structure"}
        if unknown:
            raise ConfigurationException(
                f"Unknown tree configuration keys: {sorted(unknown)}",
                details={"keys": sorted(unknown)},
            )

        retain = data.get("retain_structure", True)
        if isinstance(retain, str):
            retain = _parse_bool("retain_structure", retain)

        config = cls(
            hash_algorithm=data.get("hash_algorithm", DEFAULT_HASH_ALGORITHM),
            digest_encoding=data.get("digest_encoding", "binary"),
            retain_structure=bool(retain),
        )
        return config.validate()

    def with_env_overrides(self) -> "TreeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        return new_config.validate()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
