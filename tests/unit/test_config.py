"""
Configuration Unit Tests
Tests for hashtree/config/runtime.py and hashtree_cli/config.py
"""
import json

import pytest

from hashtree.config import TreeConfig
from hashtree.merkle import TreeBuilder
from hashtree.crypto.hashing import sha512
from hashtree.schemas.errors import ConfigurationException
from hashtree_cli.config import (
    CLIConfig,
    get_default_config_template,
    load_config,
    load_config_from_file,
)


class TestTreeConfig:
    """Tests for TreeConfig."""

    def test_defaults(self):
        """Defaults: sha256, binary encoding, structure retained."""
        config = TreeConfig()

        assert config.hash_algorithm == "sha256"
        assert config.digest_encoding == "binary"
        assert config.retain_structure is True

    def test_from_dict_partial(self):
        """Missing keys fall back to defaults."""
        config = TreeConfig.from_dict({"digest_encoding": "hex"})

        assert config.digest_encoding == "hex"
        assert config.hash_algorithm == "sha256"

    def test_from_dict_string_bool(self):
        """retain_structure accepts boolean strings."""
        assert TreeConfig.from_dict({"retain_structure": "false"}).retain_structure is False

    def test_from_dict_unknown_key(self):
        """Unknown keys are rejected."""
        with pytest.raises(ConfigurationException, match="Unknown tree configuration keys"):
            TreeConfig.from_dict({"hash": "sha256"})

    def test_unknown_algorithm(self):
        """Unknown algorithms fail validation with the field path."""
        with pytest.raises(ConfigurationException) as exc_info:
            TreeConfig.from_dict({"hash_algorithm": "md5"})

        assert exc_info.value.details["field_path"] == "hash_algorithm"

    @pytest.mark.parametrize("field_name, value", [
        ("hash_algorithm", None),
        ("hash_algorithm", 256),
        ("digest_encoding", None),
        ("digest_encoding", ["hex"]),
    ])
    def test_non_string_values(self, field_name, value):
        """Non-string algorithm or encoding values fail validation."""
        with pytest.raises(ConfigurationException, match="must be a string") as exc_info:
            TreeConfig.from_dict({field_name: value})

        assert exc_info.value.details["field_path"] == field_name

    def test_null_algorithm_in_config_file(self, tmp_path, clean_env):
        """A null algorithm in a JSON config file is a configuration error."""
        path = tmp_path / "hashtree.json"
        path.write_text(json.dumps({"tree": {"hash_algorithm": None}}))

        with pytest.raises(ConfigurationException, match="hash_algorithm"):
            load_config(path)

    def test_unknown_encoding(self):
        """Unknown encodings fail validation."""
        with pytest.raises(ConfigurationException, match="digest encoding"):
            TreeConfig(digest_encoding="base64").validate()

    def test_from_env(self, clean_env):
        """Environment variables are read with the HASHTREE_ prefix."""
        clean_env.setenv("HASHTREE_HASH_ALGORITHM", "sha512")
        clean_env.setenv("HASHTREE_DIGEST_ENCODING", "hex")
        clean_env.setenv("HASHTREE_RETAIN_STRUCTURE", "no")

        config = TreeConfig.from_env()

        assert config == TreeConfig("sha512", "hex", False)

    def test_invalid_env_bool(self, clean_env):
        """Unparseable booleans raise."""
        clean_env.setenv("HASHTREE_RETAIN_STRUCTURE", "maybe")

        with pytest.raises(ConfigurationException, match="Invalid boolean"):
            TreeConfig.from_env()

    def test_with_env_overrides(self, clean_env):
        """Env values override file values; others are kept."""
        clean_env.setenv("HASHTREE_DIGEST_ENCODING", "hex")
        base = TreeConfig(hash_algorithm="sha512")

        config = base.with_env_overrides()

        assert config.hash_algorithm == "sha512"
        assert config.digest_encoding == "hex"
        assert base.digest_encoding == "binary"

    def test_builder_from_config(self):
        """TreeBuilder.from_config resolves the algorithm name."""
        builder = TreeBuilder.from_config(TreeConfig("sha512", "hex", False))

        assert builder.hash_function is sha512
        assert builder.digest_encoding == "hex"
        assert builder.retain_structure is False


class TestCLIConfig:
    """Tests for CLI configuration loading."""

    def test_template_is_valid(self, tmp_path, clean_env):
        """The template file loads back to defaults."""
        path = tmp_path / "hashtree.json"
        path.write_text(get_default_config_template())

        config = load_config_from_file(path)

        assert config.tree == TreeConfig()
        assert config.log_level == "WARNING"
        assert config.default_output_format == "human"

    def test_load_from_file(self, tmp_path, clean_env):
        """File values are applied."""
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({
            "tree": {"hash_algorithm": "blake2b"},
            "log_level": "DEBUG",
            "default_output_format": "json",
        }))

        config = load_config(path)

        assert config.tree.hash_algorithm == "blake2b"
        assert config.log_level == "DEBUG"
        assert config.default_output_format == "json"

    def test_env_overrides_file(self, tmp_path, clean_env):
        """Environment variables win over file values."""
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"tree": {"hash_algorithm": "blake2b"}, "log_level": "DEBUG"}))
        clean_env.setenv("HASHTREE_HASH_ALGORITHM", "sha3_256")
        clean_env.setenv("HASHTREE_LOG_LEVEL", "ERROR")

        config = load_config(path)

        assert config.tree.hash_algorithm == "sha3_256"
        assert config.log_level == "ERROR"

    def test_missing_file(self, tmp_path):
        """An explicit config path must exist."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        """Broken JSON raises ConfigurationException."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationException, match="Invalid JSON"):
            load_config_from_file(path)

    def test_default_location(self, tmp_path, clean_env):
        """./hashtree.json is picked up when no path is given."""
        (tmp_path / "hashtree.json").write_text(json.dumps({"tree": {"digest_encoding": "hex"}}))
        clean_env.chdir(tmp_path)

        assert load_config().tree.digest_encoding == "hex"

    def test_cli_config_defaults(self):
        """CLIConfig defaults."""
        config = CLIConfig()

        assert config.tree == TreeConfig()
        assert config.log_file is None
