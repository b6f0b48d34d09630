"""
Schemas

Error taxonomy and verification result models shared by the library and CLI.
"""

from .errors import (
    ConfigurationException,
    DigestFormatException,
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    RootMismatchException,
    StructureNotRetainedException,
    UnknownHashAlgorithmException,
)

from .verification import (
    CheckResult,
    CheckSeverity,
    VerificationResult,
)

__all__ = [
    # Errors
    "ConfigurationException",
    "DigestFormatException",
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "RootMismatchException",
    "StructureNotRetainedException",
    "UnknownHashAlgorithmException",
    # Verification
    "CheckResult",
    "CheckSeverity",
    "VerificationResult",
]
