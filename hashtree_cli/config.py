"""
CLI Configuration

Configuration management for the hashtree CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from hashtree.config import ENV_PREFIX, TreeConfig
from hashtree.schemas.errors import ConfigurationException


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Tree construction
    tree: TreeConfig = field(default_factory=TreeConfig)

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationException(
                f"Invalid JSON in config file {path}: {e}",
                details={"path": str(path)},
            ) from e

    config = CLIConfig()
    config.tree = TreeConfig.from_dict(data.get("tree", {}))

    # Logging
    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)

    # Output
    config.default_output_format = data.get(
        "default_output_format", config.default_output_format
    )

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "hashtree.json",
            Path.cwd() / ".hashtree.json",
            Path.home() / ".config" / "hashtree" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    config.tree = config.tree.with_env_overrides()

    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", config.log_level)
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = os.getenv(
            f"{ENV_PREFIX}OUTPUT_FORMAT", config.default_output_format
        )

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "tree": {
    "hash_algorithm": "sha256",
    "digest_encoding": "binary",
    "retain_structure": true
  },
  "log_level": "WARNING",
  "log_file": null,
  "default_output_format": "human"
}
"""
