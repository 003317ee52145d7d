"""
Signing Module
==============
Canonical request strings and multi-algorithm signatures.
"""

from .algorithms import AlgorithmFamily, SignType
from .canonical import canonicalize, normalize_host, SIGNATURE_PARAM, DEBUG_PARAM
from .engine import generate_signature, verify_signature
from .client import sign_params, generate_nonce, generate_debug_nonce

__all__ = [
    # Algorithms
    "AlgorithmFamily",
    "SignType",
    # Canonical string
    "canonicalize",
    "normalize_host",
    "SIGNATURE_PARAM",
    "DEBUG_PARAM",
    # Engine
    "generate_signature",
    "verify_signature",
    # Client
    "sign_params",
    "generate_nonce",
    "generate_debug_nonce",
]
