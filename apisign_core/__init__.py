"""
APISign Core Library
====================
Signed API requests: canonical strings, multi-algorithm signatures,
freshness and replay checks, and debug signing for integration testing.
"""

__version__ = "0.1.0"

# Config
from apisign_core.config import SignConfig

# Errors
from apisign_core.errors import (
    RejectReason,
    APISignError,
    AuthenticationFailure,
    ValidationError,
    UnknownCaller,
    UnsupportedAlgorithm,
    DebugForbidden,
    SignatureExpired,
    SignatureInvalid,
    CryptoFailure,
    ReplayDetected,
    InternalError,
)

# Key Registry
from apisign_core.keys import (
    CallerRecord,
    RSAKeyPair,
    KeyRegistry,
)

# Signing
from apisign_core.signing import (
    AlgorithmFamily,
    SignType,
    canonicalize,
    generate_signature,
    verify_signature,
    sign_params,
)

# Verification
from apisign_core.verification import (
    RequestContext,
    VerificationDecision,
    VerificationResult,
    InMemoryNonceStore,
    RedisNonceStore,
    SignatureVerifier,
)

# Logging
from apisign_core.log_setup import setup_logging

__all__ = [
    "__version__",
    # Config
    "SignConfig",
    # Errors
    "RejectReason",
    "APISignError",
    "AuthenticationFailure",
    "ValidationError",
    "UnknownCaller",
    "UnsupportedAlgorithm",
    "DebugForbidden",
    "SignatureExpired",
    "SignatureInvalid",
    "CryptoFailure",
    "ReplayDetected",
    "InternalError",
    # Key Registry
    "CallerRecord",
    "RSAKeyPair",
    "KeyRegistry",
    # Signing
    "AlgorithmFamily",
    "SignType",
    "canonicalize",
    "generate_signature",
    "verify_signature",
    "sign_params",
    # Verification
    "RequestContext",
    "VerificationDecision",
    "VerificationResult",
    "InMemoryNonceStore",
    "RedisNonceStore",
    "SignatureVerifier",
    # Logging
    "setup_logging",
]
