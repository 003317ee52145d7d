"""
Verification Module
===================
Signed-request verification with freshness and replay protection.
"""

from .models import RequestContext, SigningParams, VerificationDecision, VerificationResult
from .params import extract_params, is_debug_request
from .nonce_store import NonceStore, InMemoryNonceStore, RedisNonceStore
from .verifier import SignatureVerifier

__all__ = [
    # Models
    "RequestContext",
    "SigningParams",
    "VerificationDecision",
    "VerificationResult",
    # Parameters
    "extract_params",
    "is_debug_request",
    # Nonce stores
    "NonceStore",
    "InMemoryNonceStore",
    "RedisNonceStore",
    # Verifier
    "SignatureVerifier",
]
