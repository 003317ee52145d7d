"""
API Signature Errors
====================
Exception hierarchy for request signature verification.
"""

from enum import Enum
from typing import Optional


class RejectReason(str, Enum):
    """Reasons for rejecting a signed request."""
    VALIDATION_ERROR = "validation_error"
    UNKNOWN_CALLER = "unknown_caller"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"
    DEBUG_FORBIDDEN = "debug_forbidden"
    SIGNATURE_EXPIRED = "signature_expired"
    SIGNATURE_INVALID = "signature_invalid"
    CRYPTO_FAILURE = "crypto_failure"
    REPLAY_DETECTED = "replay_detected"
    INTERNAL_ERROR = "internal_error"


class APISignError(Exception):
    """Base exception for all signature verification errors."""
    reason: RejectReason = RejectReason.INTERNAL_ERROR

    def __init__(self, message: str, key_id: Optional[str] = None):
        self.message = message
        self.key_id = key_id
        super().__init__(message)


class AuthenticationFailure(APISignError):
    """Raised when the caller's request fails authentication."""
    pass


class ValidationError(AuthenticationFailure):
    """Raised when a required parameter is missing or malformed."""
    reason = RejectReason.VALIDATION_ERROR


class UnknownCaller(AuthenticationFailure):
    """Raised when the KeyID has no record in the registry."""
    reason = RejectReason.UNKNOWN_CALLER


class UnsupportedAlgorithm(AuthenticationFailure):
    """Raised for an unknown sign type or one with no configured secret."""
    reason = RejectReason.UNSUPPORTED_ALGORITHM


class DebugForbidden(AuthenticationFailure):
    """Raised when debug signing is requested outside debug runmode."""
    reason = RejectReason.DEBUG_FORBIDDEN


class SignatureExpired(AuthenticationFailure):
    """Raised when the timestamp is in the future or outside the lifetime."""
    reason = RejectReason.SIGNATURE_EXPIRED


class SignatureInvalid(AuthenticationFailure):
    """Raised when the presented signature does not match."""
    reason = RejectReason.SIGNATURE_INVALID


class CryptoFailure(AuthenticationFailure):
    """Raised when the presented signature cannot be decoded or decrypted."""
    reason = RejectReason.CRYPTO_FAILURE


class ReplayDetected(AuthenticationFailure):
    """Raised when a (KeyID, Nonce) pair is seen twice inside the lifetime."""
    reason = RejectReason.REPLAY_DETECTED


class InternalError(APISignError):
    """Raised when the server cannot process the request at all."""
    reason = RejectReason.INTERNAL_ERROR
