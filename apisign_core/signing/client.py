"""
Request Signing
===============
Caller-side helper producing the parameters a signed request must carry.
"""

import secrets
import time
from typing import Any, Dict, Mapping, Optional

from ..keys.models import SecretMaterial
from .canonical import DEBUG_PARAM, SIGNATURE_PARAM, canonicalize, first_value
from .engine import generate_signature

# Nonces are unique per (KeyID, Nonce) for a whole lifetime window
NONCE_BITS = 63

DEBUG_NONCE_UPPER_BOUND = 100000


def generate_nonce() -> int:
    """Generate a random request nonce."""
    return secrets.randbits(NONCE_BITS)


def generate_debug_nonce() -> int:
    """Generate the short nonce handed out by debug issuance."""
    return secrets.randbelow(DEBUG_NONCE_UPPER_BOUND)


def sign_params(
    method: str,
    host: str,
    path: str,
    params: Mapping[str, Any],
    key_id: str,
    secret: SecretMaterial,
    sign_type,
    timestamp: Optional[int] = None,
    nonce: Optional[int] = None,
    debug_param: str = DEBUG_PARAM,
) -> Dict[str, str]:
    """
    Sign a request's parameters.

    Multi-valued parameters are reduced to their first value, which is the
    only one the server signs.

    Args:
        method: HTTP method
        host: Host the request is sent to
        path: Route path registered on the server
        params: Application parameters
        key_id: Caller's KeyID
        secret: Caller's secret (RSAKeyPair with private key for "rsa")
        sign_type: Sign type the endpoint requires
        timestamp: Unix seconds, defaults to now
        nonce: Integer nonce, random if omitted
        debug_param: Name of the server's debug flag parameter

    Returns:
        New parameter mapping including KeyID, Timestamp, Nonce and Signature
    """
    signed = {key: first_value(value) for key, value in params.items()}
    signed["KeyID"] = key_id
    signed["Timestamp"] = str(int(time.time()) if timestamp is None else timestamp)
    signed["Nonce"] = str(generate_nonce() if nonce is None else nonce)
    signed.pop(SIGNATURE_PARAM, None)

    canonical = canonicalize(method, host, path, signed, debug_param)
    signed[SIGNATURE_PARAM] = generate_signature(canonical, secret, sign_type)
    return signed
