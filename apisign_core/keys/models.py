"""
Key Models
==========
Caller records and the secret material they hold.
"""

from dataclasses import dataclass
from typing import Optional, Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey


@dataclass(frozen=True)
class RSAKeyPair:
    """
    A caller's RSA keys.

    The public key verifies signatures the caller produces. The private key
    is optional and only used to issue debug signatures on the caller's behalf.
    """
    public_key: RSAPublicKey
    private_key: Optional[RSAPrivateKey] = None

    @classmethod
    def from_pem(
        cls,
        public_pem: str,
        private_pem: Optional[str] = None,
    ) -> "RSAKeyPair":
        """
        Load a key pair from PEM text.

        Raises:
            ValueError: If either key cannot be parsed or is not RSA
        """
        public_key = serialization.load_pem_public_key(public_pem.encode())
        if not isinstance(public_key, RSAPublicKey):
            raise ValueError("Public key is not an RSA key")

        private_key = None
        if private_pem:
            private_key = serialization.load_pem_private_key(
                private_pem.encode(), password=None
            )
            if not isinstance(private_key, RSAPrivateKey):
                raise ValueError("Private key is not an RSA key")
        return cls(public_key=public_key, private_key=private_key)


SecretMaterial = Union[str, RSAKeyPair]


@dataclass(frozen=True)
class CallerRecord:
    """Secret material registered for one KeyID."""
    key_id: str
    md5_secret: Optional[str] = None
    aes_key: Optional[str] = None
    hmac_secret: Optional[str] = None
    rsa: Optional[RSAKeyPair] = None
    name: Optional[str] = None

    def __repr__(self) -> str:
        # Never render secrets
        return f"CallerRecord(key_id={self.key_id!r}, name={self.name!r})"
