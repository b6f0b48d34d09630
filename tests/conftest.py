"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import hashlib
import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from hashtree.merkle import TreeBuilder  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def builder():
    """Default builder: sha256, binary digest encoding, structure retained."""
    return TreeBuilder()


@pytest.fixture
def hex_builder():
    """Builder that joins child digests as hex text."""
    return TreeBuilder(digest_encoding="hex")


@pytest.fixture
def transactions():
    """Three blocks, so the leaf level needs parity padding."""
    return [b"Tx1: Alice->Bob", b"Tx2: Bob->Charlie", b"Tx3: Charlie->Dave"]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove HASHTREE_* variables so config tests start from defaults."""
    for name in [
        "HASHTREE_HASH_ALGORITHM",
        "HASHTREE_DIGEST_ENCODING",
        "HASHTREE_RETAIN_STRUCTURE",
        "HASHTREE_LOG_LEVEL",
        "HASHTREE_LOG_FILE",
        "HASHTREE_OUTPUT_FORMAT",
    ]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


# =============================================================================
# Test Helpers (available to all tests via fixtures)
# =============================================================================

@pytest.fixture
def sha():
    """Raw sha256 digest helper, independent of the library."""
    def _sha(data: bytes) -> bytes:
        return hashlib.sha256(data).digest()
    return _sha


@pytest.fixture
def assert_check_passed():
    """Helper to assert a specific check passed in VerificationResult."""
    def _assert(result, check_id: str):
        checks = [c for c in result.checks if c.check_id == check_id]
        assert len(checks) == 1, f"Expected check '{check_id}' not found in {[c.check_id for c in result.checks]}"
        assert checks[0].ok, f"Check '{check_id}' failed: {checks[0].message}"
    return _assert


@pytest.fixture
def assert_check_failed():
    """Helper to assert a specific check failed in VerificationResult."""
    def _assert(result, check_id: str):
        checks = [c for c in result.checks if c.check_id == check_id]
        assert len(checks) == 1, f"Expected check '{check_id}' not found in {[c.check_id for c in result.checks]}"
        assert not checks[0].ok, f"Check '{check_id}' unexpectedly passed"
    return _assert
