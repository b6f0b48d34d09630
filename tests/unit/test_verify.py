"""
Root Verification Unit Tests
Tests for hashtree/merkle/verify.py and the verification result models.
"""
import pytest

from hashtree.crypto.hashing import sha256, to_hex
from hashtree.merkle import MerkleTree, TreeBuilder, require_root, verify_root, verify_tree
from hashtree.schemas.errors import (
    DigestFormatException,
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    RootMismatchException,
)
from hashtree.schemas.verification import CheckResult, VerificationResult


class TestVerifyRoot:
    """Tests for verify_root()."""

    def test_matching_root_bytes(self, builder, transactions, assert_check_passed):
        """Correct root as bytes verifies."""
        root = builder.build(transactions).root_digest()
        result = verify_root(transactions, root)

        assert result.ok
        assert result.error is None
        assert_check_passed(result, "root_match")

    def test_matching_root_hex(self, builder, transactions):
        """Correct root as 0x-hex verifies."""
        root_hex = builder.build(transactions).root_hex()

        assert verify_root(transactions, root_hex).ok

    def test_mismatch(self, transactions, assert_check_failed):
        """Wrong root fails with a ROOT_MISMATCH error."""
        result = verify_root(transactions, sha256(b"wrong root"))

        assert not result.ok
        assert_check_failed(result, "root_match")
        assert result.error.code == ErrorCodes.ROOT_MISMATCH
        assert result.error.details["expected"] == to_hex(sha256(b"wrong root"))

    def test_tampered_block_fails(self, builder, transactions):
        """Changing one block breaks verification."""
        root = builder.build(transactions).root_digest()
        tampered = list(transactions)
        tampered[2] = b"Tx3: Charlie->Mallory"

        assert not verify_root(tampered, root).ok

    def test_reordered_blocks_fail(self, builder, transactions):
        """Reordering blocks breaks verification."""
        root = builder.build(transactions).root_digest()

        assert not verify_root(list(reversed(transactions)), root).ok

    def test_empty_blocks_against_sentinel(self):
        """No blocks verify against sha256(b"")."""
        assert verify_root([], sha256(b"")).ok

    def test_uses_given_builder(self, hex_builder, transactions):
        """Roots built with hex encoding verify only with a hex builder."""
        root = hex_builder.build(transactions).root_digest()

        assert verify_root(transactions, root, hex_builder).ok
        assert not verify_root(transactions, root).ok

    def test_malformed_hex_raises(self, transactions):
        """A malformed hex root is an error, not a mismatch."""
        with pytest.raises(DigestFormatException):
            verify_root(transactions, "not-hex")


class TestVerifyTree:
    """Tests for verify_tree()."""

    def test_built_tree_passes(self, builder, transactions, assert_check_passed):
        """A freshly built tree passes both checks."""
        result = verify_tree(builder.build(transactions))

        assert result.ok
        assert_check_passed(result, "leaf_count")
        assert_check_passed(result, "root_match")

    def test_empty_tree_passes(self, builder):
        """An empty tree passes."""
        assert verify_tree(builder.build([])).ok

    def test_forged_root_fails(self, builder, transactions, assert_check_failed):
        """A tree whose stored root was swapped fails root_match."""
        tree = builder.build(transactions)
        forged = MerkleTree(
            leaves=tree.leaves,
            root=None,
            root_hash=sha256(b"forged"),
            builder=tree.builder,
        )

        result = verify_tree(forged)

        assert not result.ok
        assert_check_failed(result, "root_match")
        assert result.error.code == ErrorCodes.ROOT_MISMATCH

    def test_root_without_leaves_fails(self, builder, assert_check_failed):
        """A root with no leaves violates the leaf_count invariant."""
        forged = MerkleTree(
            leaves=(),
            root=None,
            root_hash=sha256(b"a"),
            builder=builder,
        )

        result = verify_tree(forged)

        assert not result.ok
        assert_check_failed(result, "leaf_count")
        assert result.error.code == ErrorCodes.LEAF_COUNT_MISMATCH


class TestRequireRoot:
    """Tests for require_root()."""

    def test_returns_root(self, builder, transactions):
        """Matching root is returned."""
        root = builder.build(transactions).root_digest()

        assert require_root(transactions, to_hex(root)) == root

    def test_raises_on_mismatch(self, transactions):
        """Mismatch raises RootMismatchException."""
        with pytest.raises(RootMismatchException) as exc_info:
            require_root(transactions, sha256(b"wrong"))

        assert exc_info.value.code == ErrorCodes.ROOT_MISMATCH
        assert isinstance(exc_info.value, HashTreeException)


class TestVerificationResult:
    """Tests for the result models."""

    def test_add_failed_check_flips_ok(self):
        """Adding a failed check marks the result as failed."""
        result = VerificationResult.success()
        result.add_check(CheckResult.passed("a"))
        assert result.ok

        result.add_check(CheckResult.failed("b", "broken"))

        assert not result.ok
        assert result.error_count == 1
        assert result.passed_count == 1
        assert result.get_error_messages() == ["broken"]

    def test_merge(self):
        """Merged result fails if either side failed."""
        merged = VerificationResult.success([CheckResult.passed("a")]).merge(
            VerificationResult.failure([CheckResult.failed("b", "broken")])
        )

        assert not merged.ok
        assert [c.check_id for c in merged.get_failed_checks()] == ["b"]

    def test_error_model_round_trip(self):
        """Exceptions convert to error models and back."""
        exc = RootMismatchException(expected="0x00", actual="0x01")
        model = exc.to_error_model()

        assert isinstance(model, HashTreeError)
        assert model.details == {"expected": "0x00", "actual": "0x01"}
        assert model.to_exception().code == ErrorCodes.ROOT_MISMATCH

    def test_check_id_required(self):
        """Empty check ids are rejected by validation."""
        with pytest.raises(ValueError):
            CheckResult.passed("")

    def test_result_serializes(self, transactions):
        """Results serialize with pydantic."""
        data = verify_root(transactions, sha256(b"x")).model_dump(mode="json")

        assert data["ok"] is False
        assert data["checks"][0]["check_id"] == "root_match"
        assert data["error"]["code"] == ErrorCodes.ROOT_MISMATCH


class TestCustomHashFunction:
    """Verification with an injected hash function."""

    def test_custom_function_round_trip(self, transactions):
        """Build and verify agree when using the same custom function."""
        def salted(data: bytes) -> bytes:
            return sha256(b"salt:" + data)

        builder = TreeBuilder(hash_function=salted)
        root = builder.build(transactions).root_digest()

        assert verify_root(transactions, root, builder).ok
        assert not verify_root(transactions, root).ok
