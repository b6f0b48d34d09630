"""
Error Taxonomy

Standard error taxonomy for tree construction and verification.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Hashing
    UNKNOWN_HASH_ALGORITHM = "UNKNOWN_HASH_ALGORITHM"
    DIGEST_FORMAT_ERROR = "DIGEST_FORMAT_ERROR"

    # Tree structure
    STRUCTURE_NOT_RETAINED = "STRUCTURE_NOT_RETAINED"

    # Merkle & Commitment Errors
    ROOT_MISMATCH = "ROOT_MISMATCH"
    LEAF_COUNT_MISMATCH = "LEAF_COUNT_MISMATCH"

    # Configuration
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class HashTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Used inside VerificationResult so that failures can be reported and
    serialized without raising.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.ROOT_MISMATCH],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "HashTreeException":
        """Convert this error model to a raised exception."""
        return HashTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class HashTreeException(Exception):
    """
    Base exception for all hashtree errors.

    Carries structured error information and can be converted to a
    HashTreeError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "HASHTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> HashTreeError:
        """Convert this exception to a HashTreeError model."""
        return HashTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class UnknownHashAlgorithmException(HashTreeException):
    """Raised when a hash algorithm name is not registered."""

    def __init__(
        self,
        algorithm: str,
        available: list[str] | None = None,
    ) -> None:
        details: dict[str, Any] = {"algorithm": algorithm}
        if available is not None:
            details["available"] = available
        super().__init__(
            message=f"Unknown hash algorithm: {algorithm!r}",
            code=ErrorCodes.UNKNOWN_HASH_ALGORITHM,
            details=details,
        )


class DigestFormatException(HashTreeException):
    """Raised when a digest string cannot be decoded."""

    def __init__(
        self,
        message: str,
        value: str | None = None,
    ) -> None:
        details = {"value": value} if value is not None else {}
        super().__init__(
            message=message,
            code=ErrorCodes.DIGEST_FORMAT_ERROR,
            details=details,
        )


class StructureNotRetainedException(HashTreeException):
    """Raised when node structure is requested from a digest-only tree."""

    def __init__(self, message: str = "Tree was built without retaining node structure") -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.STRUCTURE_NOT_RETAINED,
        )


class RootMismatchException(HashTreeException):
    """Raised when a recomputed root does not match the expected root."""

    def __init__(
        self,
        expected: str,
        actual: str,
    ) -> None:
        super().__init__(
            message=f"Root mismatch: expected {expected}, computed {actual}",
            code=ErrorCodes.ROOT_MISMATCH,
            details={"expected": expected, "actual": actual},
        )


class ConfigurationException(HashTreeException):
    """Raised when configuration values are invalid."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=full_details,
        )
