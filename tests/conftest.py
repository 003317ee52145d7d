"""
Shared fixtures for apisign-core tests.
"""

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

NOW = 1700000000

AES_KEY = "0123456789abcdef"


@pytest.fixture(scope="session")
def rsa_pems():
    """(public_pem, private_pem) for a throwaway 2048-bit key."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    return public_pem, private_pem


@pytest.fixture
def callers(rsa_pems):
    public_pem, private_pem = rsa_pems
    return {
        "abc123": {
            "name": "Orders integration",
            "md5": "s3cr3t",
            "aes": AES_KEY,
            "hmac": "hm4c-s3cr3t",
            "rsa": {"public": public_pem, "private": private_pem},
        },
        "md5only": {
            "md5": "only-md5",
        },
        "pubonly": {
            "rsa": {"public": public_pem},
        },
    }


@pytest.fixture
def registry(callers):
    from apisign_core.keys import KeyRegistry

    return KeyRegistry.from_mapping(callers)


@pytest.fixture
def clock():
    return lambda: float(NOW)


@pytest.fixture
def release_verifier(registry, clock):
    from apisign_core import SignConfig, SignatureVerifier

    return SignatureVerifier(
        registry,
        SignConfig(runmode="release", lifetime_seconds=300),
        clock=clock,
    )


@pytest.fixture
def debug_verifier(registry, clock):
    from apisign_core import SignConfig, SignatureVerifier

    return SignatureVerifier(
        registry,
        SignConfig(runmode="debug", lifetime_seconds=300),
        clock=clock,
    )


@pytest.fixture
def aes_key():
    return AES_KEY


@pytest.fixture
def now():
    return NOW
