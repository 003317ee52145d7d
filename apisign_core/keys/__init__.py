"""
Key Registry Module
===================
Caller records and secret lookup by KeyID and sign type.
"""

from .models import CallerRecord, RSAKeyPair, SecretMaterial
from .registry import KeyRegistry

__all__ = [
    "CallerRecord",
    "RSAKeyPair",
    "SecretMaterial",
    "KeyRegistry",
]
