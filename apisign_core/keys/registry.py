"""
Key Registry
============
Read-only mapping from KeyID to the caller's secret material.

The registry is built once at startup and injected into the verifier.
It is never mutated per request, so concurrent lookups need no locking.
"""

from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping
import structlog

from ..errors import UnknownCaller, UnsupportedAlgorithm
from ..signing.algorithms import AlgorithmFamily, SignType
from ..signing.ciphers import aes_key_bytes
from .models import CallerRecord, RSAKeyPair, SecretMaterial

logger = structlog.get_logger(__name__)


class KeyRegistry:
    """Lookup of callers and their per-family secrets."""

    def __init__(self, records: Iterable[CallerRecord] = ()):
        entries: Dict[str, CallerRecord] = {}
        for record in records:
            if not record.key_id:
                raise ValueError("CallerRecord.key_id must not be empty")
            if record.key_id in entries:
                raise ValueError(f"Duplicate KeyID '{record.key_id}'")
            if record.aes_key is not None:
                aes_key_bytes(record.aes_key)
            entries[record.key_id] = record

        self._records: Mapping[str, CallerRecord] = MappingProxyType(entries)
        logger.info("key_registry_loaded", callers=len(entries))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, Any]]) -> "KeyRegistry":
        """
        Build a registry from plain configuration data.

        Args:
            data: KeyID -> {"md5", "aes", "hmac", "name", "rsa": {"public", "private"}}

        Returns:
            KeyRegistry

        Raises:
            ValueError: If a secret is malformed
        """
        records = []
        for key_id, entry in data.items():
            rsa = None
            rsa_entry = entry.get("rsa")
            if rsa_entry:
                rsa = RSAKeyPair.from_pem(
                    rsa_entry["public"],
                    rsa_entry.get("private"),
                )
            records.append(CallerRecord(
                key_id=key_id,
                md5_secret=entry.get("md5"),
                aes_key=entry.get("aes"),
                hmac_secret=entry.get("hmac"),
                rsa=rsa,
                name=entry.get("name"),
            ))
        return cls(records)

    def lookup(self, key_id: str) -> CallerRecord:
        """
        Find the record for a KeyID.

        Raises:
            UnknownCaller: If the KeyID is not registered
        """
        record = self._records.get(key_id)
        if record is None:
            raise UnknownCaller(f"KeyID '{key_id}' not found", key_id=key_id)
        return record

    def secret_for(self, record: CallerRecord, sign_type: SignType) -> SecretMaterial:
        """
        Select the secret a sign type needs from a caller record.

        Raises:
            UnsupportedAlgorithm: If the caller has no secret for that family
        """
        family = SignType.parse(sign_type).family
        if family is AlgorithmFamily.HASH_SYMMETRIC:
            secret = record.md5_secret
        elif family is AlgorithmFamily.CIPHER_SYMMETRIC:
            secret = record.aes_key
        elif family is AlgorithmFamily.CIPHER_ASYMMETRIC:
            secret = record.rsa
        elif family is AlgorithmFamily.KEYED_HASH:
            secret = record.hmac_secret
        else:
            secret = None

        if not secret:
            raise UnsupportedAlgorithm(
                f"KeyID '{record.key_id}' has no secret for {family.value}",
                key_id=record.key_id,
            )
        return secret

    def __contains__(self, key_id: object) -> bool:
        return key_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)
