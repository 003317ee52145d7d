"""
Signature Engine
================
Generates and verifies signatures over canonical request strings.

Families:
- hash-symmetric:    md5(secret + canonical + secret)
- cipher-symmetric:  AES-CBC encryption of the canonical string
- cipher-asymmetric: RSA signature by the caller's private key,
                     verified with the caller's public key
- keyed-hash:        HMAC-MD5 / HMAC-SHA1 / HMAC-SHA256
"""

import hmac
from typing import Callable, Dict

from ..errors import SignatureInvalid, UnsupportedAlgorithm
from ..keys.models import RSAKeyPair, SecretMaterial
from .algorithms import AlgorithmFamily, SignType
from .ciphers import aes_decrypt, aes_encrypt, hmac_hex, md5sum, rsa_sign, rsa_verify


def _require_text(secret: SecretMaterial, sign_type: SignType) -> str:
    if not isinstance(secret, str):
        raise UnsupportedAlgorithm(f"Sign type '{sign_type.value}' needs a text secret")
    return secret


def _require_rsa(secret: SecretMaterial) -> RSAKeyPair:
    if not isinstance(secret, RSAKeyPair):
        raise UnsupportedAlgorithm("Sign type 'rsa' needs an RSA key pair")
    return secret


# =============================================================================
# Generation
# =============================================================================

def _generate_hash(canonical: str, secret: SecretMaterial, sign_type: SignType) -> str:
    secret = _require_text(secret, sign_type)
    return md5sum(secret + canonical + secret)


def _generate_cipher(canonical: str, secret: SecretMaterial, sign_type: SignType) -> str:
    return aes_encrypt(canonical, _require_text(secret, sign_type))


def _generate_asymmetric(canonical: str, secret: SecretMaterial, sign_type: SignType) -> str:
    keys = _require_rsa(secret)
    if keys.private_key is None:
        raise UnsupportedAlgorithm("No RSA private key available to sign with")
    return rsa_sign(canonical, keys.private_key)


def _generate_keyed_hash(canonical: str, secret: SecretMaterial, sign_type: SignType) -> str:
    return hmac_hex(sign_type.digest, canonical, _require_text(secret, sign_type))


_GENERATORS: Dict[AlgorithmFamily, Callable[[str, SecretMaterial, SignType], str]] = {
    AlgorithmFamily.HASH_SYMMETRIC: _generate_hash,
    AlgorithmFamily.CIPHER_SYMMETRIC: _generate_cipher,
    AlgorithmFamily.CIPHER_ASYMMETRIC: _generate_asymmetric,
    AlgorithmFamily.KEYED_HASH: _generate_keyed_hash,
}


def generate_signature(canonical: str, secret: SecretMaterial, sign_type) -> str:
    """
    Compute a signature for a canonical string.

    Args:
        canonical: Canonical request string
        secret: Text secret, or RSAKeyPair holding a private key for "rsa"
        sign_type: SignType or its string value

    Returns:
        Hex digest for hash families, base64 for cipher families

    Raises:
        UnsupportedAlgorithm: If the sign type is unknown or the secret
            does not fit it
    """
    sign_type = SignType.parse(sign_type)
    return _GENERATORS[sign_type.family](canonical, secret, sign_type)


# =============================================================================
# Verification
# =============================================================================

def _verify_digest(canonical: str, secret: SecretMaterial, sign_type: SignType, presented: str) -> bool:
    expected = generate_signature(canonical, secret, sign_type)
    return hmac.compare_digest(expected.encode(), presented.encode())


def _verify_cipher(canonical: str, secret: SecretMaterial, sign_type: SignType, presented: str) -> bool:
    plaintext = aes_decrypt(presented, _require_text(secret, sign_type))
    return hmac.compare_digest(plaintext.encode(), canonical.encode())


def _verify_asymmetric(canonical: str, secret: SecretMaterial, sign_type: SignType, presented: str) -> bool:
    return rsa_verify(canonical, presented, _require_rsa(secret).public_key)


_VERIFIERS: Dict[AlgorithmFamily, Callable[[str, SecretMaterial, SignType, str], bool]] = {
    AlgorithmFamily.HASH_SYMMETRIC: _verify_digest,
    AlgorithmFamily.CIPHER_SYMMETRIC: _verify_cipher,
    AlgorithmFamily.CIPHER_ASYMMETRIC: _verify_asymmetric,
    AlgorithmFamily.KEYED_HASH: _verify_digest,
}

if set(_GENERATORS) != set(AlgorithmFamily) or set(_VERIFIERS) != set(AlgorithmFamily):
    raise RuntimeError("Signature engine must handle every AlgorithmFamily")


def verify_signature(
    canonical: str,
    sign_type,
    secret: SecretMaterial,
    presented: str,
) -> None:
    """
    Check a presented signature against a canonical string.

    Args:
        canonical: Canonical request string recomputed by the server
        sign_type: SignType or its string value
        secret: Caller's secret for the sign type's family
        presented: Signature from the request

    Raises:
        SignatureInvalid: If the signature does not match
        CryptoFailure: If the signature cannot be decoded or decrypted
        UnsupportedAlgorithm: If the sign type is unknown
    """
    sign_type = SignType.parse(sign_type)
    if not _VERIFIERS[sign_type.family](canonical, secret, sign_type, presented):
        raise SignatureInvalid("Signature invalid")
