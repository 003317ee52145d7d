"""
Verification Models
===================
Request context, extracted parameters and verification results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ..errors import APISignError, RejectReason


class VerificationDecision(str, Enum):
    """Outcome of verifying a signed request."""
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    DEBUG_ISSUED = "debug_issued"


@dataclass
class RequestContext:
    """What the verifier needs to know about an incoming request."""
    method: str
    host: str
    path: str
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class SigningParams:
    """Protocol parameters bound from a request."""
    key_id: str
    timestamp: Optional[int] = None
    nonce: Optional[int] = None
    signature: Optional[str] = None
    debug: bool = False


@dataclass
class VerificationResult:
    """Result of a verification attempt."""
    decision: VerificationDecision
    reason: Optional[RejectReason] = None
    message: Optional[str] = None
    key_id: Optional[str] = None
    sign_type: Optional[str] = None
    debug_params: Optional[Dict[str, str]] = None

    @property
    def accepted(self) -> bool:
        return self.decision == VerificationDecision.ACCEPTED

    @property
    def is_internal_error(self) -> bool:
        return self.reason == RejectReason.INTERNAL_ERROR

    @classmethod
    def ok(cls, key_id: str, sign_type: str) -> "VerificationResult":
        """Create an accepted result."""
        return cls(
            decision=VerificationDecision.ACCEPTED,
            key_id=key_id,
            sign_type=sign_type,
        )

    @classmethod
    def rejected(
        cls,
        error: APISignError,
        sign_type: Optional[str] = None,
    ) -> "VerificationResult":
        """Create a rejected result from a verification error."""
        return cls(
            decision=VerificationDecision.REJECTED,
            reason=error.reason,
            message=error.message,
            key_id=error.key_id,
            sign_type=sign_type,
        )

    @classmethod
    def debug_issued(
        cls,
        key_id: str,
        sign_type: str,
        timestamp: str,
        nonce: str,
        signature: str,
    ) -> "VerificationResult":
        """Create a result carrying a debug signature triple."""
        return cls(
            decision=VerificationDecision.DEBUG_ISSUED,
            key_id=key_id,
            sign_type=sign_type,
            debug_params={
                "Timestamp": timestamp,
                "Nonce": nonce,
                "Signature": signature,
            },
        )
