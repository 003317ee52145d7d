"""
Signature Algorithms
====================
Sign type selectors and the algorithm families they belong to.
"""

import hashlib
from enum import Enum
from typing import Callable, Dict

from ..errors import UnsupportedAlgorithm


class AlgorithmFamily(str, Enum):
    """Cryptographic scheme used to produce a signature."""
    HASH_SYMMETRIC = "hash-symmetric"
    CIPHER_SYMMETRIC = "cipher-symmetric"
    CIPHER_ASYMMETRIC = "cipher-asymmetric"
    KEYED_HASH = "keyed-hash"


class SignType(str, Enum):
    """Per-endpoint signature selector."""
    MD5 = "md5"
    AES = "aes"
    RSA = "rsa"
    HMAC_MD5 = "hmac_md5"
    HMAC_SHA1 = "hmac_sha1"
    HMAC_SHA256 = "hmac_sha256"

    @property
    def family(self) -> AlgorithmFamily:
        return _FAMILIES[self]

    @property
    def digest(self) -> Callable:
        """Digest constructor for keyed-hash variants."""
        try:
            return _HMAC_DIGESTS[self]
        except KeyError:
            raise UnsupportedAlgorithm(f"Sign type '{self.value}' is not a keyed hash")

    @classmethod
    def parse(cls, value) -> "SignType":
        """Convert a selector string, failing closed on unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedAlgorithm(f"Signature encrypt type '{value}' invalid")


_FAMILIES: Dict[SignType, AlgorithmFamily] = {
    SignType.MD5: AlgorithmFamily.HASH_SYMMETRIC,
    SignType.AES: AlgorithmFamily.CIPHER_SYMMETRIC,
    SignType.RSA: AlgorithmFamily.CIPHER_ASYMMETRIC,
    SignType.HMAC_MD5: AlgorithmFamily.KEYED_HASH,
    SignType.HMAC_SHA1: AlgorithmFamily.KEYED_HASH,
    SignType.HMAC_SHA256: AlgorithmFamily.KEYED_HASH,
}

_HMAC_DIGESTS: Dict[SignType, Callable] = {
    SignType.HMAC_MD5: hashlib.md5,
    SignType.HMAC_SHA1: hashlib.sha1,
    SignType.HMAC_SHA256: hashlib.sha256,
}

if set(_FAMILIES) != set(SignType):
    raise RuntimeError("Every SignType must map to an AlgorithmFamily")
