"""
Cipher Primitives
=================
Digest, HMAC, AES and RSA helpers used by the signature engine.

All binary signatures travel as standard base64; digests as lowercase hex.
"""

import base64
import binascii
import hashlib
import hmac
import os
from typing import Callable

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, padding as sym_padding
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..errors import CryptoFailure

AES_KEY_SIZES = (16, 24, 32)
AES_BLOCK_BYTES = 16


def md5sum(value: str) -> str:
    """Hex-encoded MD5 of a UTF-8 string."""
    return hashlib.md5(value.encode()).hexdigest()


def hmac_hex(digest: Callable, message: str, secret: str) -> str:
    """Hex-encoded HMAC of message keyed by secret."""
    return hmac.new(secret.encode(), message.encode(), digest).hexdigest()


def b64decode_strict(value: str) -> bytes:
    """Decode standard base64, raising CryptoFailure on malformed input."""
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CryptoFailure(f"Signature is not valid base64: {e}")


def aes_key_bytes(key: str) -> bytes:
    """Validate and encode an AES secret."""
    key_bytes = key.encode()
    if len(key_bytes) not in AES_KEY_SIZES:
        raise ValueError(
            f"AES key must be 16, 24 or 32 bytes, got {len(key_bytes)}"
        )
    return key_bytes


def aes_encrypt(plaintext: str, key: str) -> str:
    """
    Encrypt with AES-CBC and PKCS#7 padding.

    Args:
        plaintext: String to encrypt
        key: AES secret (16, 24 or 32 bytes once UTF-8 encoded)

    Returns:
        base64(iv + ciphertext)
    """
    iv = os.urandom(AES_BLOCK_BYTES)
    padder = sym_padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(plaintext.encode()) + padder.finalize()

    encryptor = Cipher(algorithms.AES(aes_key_bytes(key)), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return base64.b64encode(iv + ciphertext).decode("ascii")


def aes_decrypt(token: str, key: str) -> str:
    """
    Decrypt a value produced by aes_encrypt.

    Raises:
        CryptoFailure: If the token is malformed, tampered or not UTF-8
    """
    raw = b64decode_strict(token)
    if len(raw) < 2 * AES_BLOCK_BYTES or len(raw) % AES_BLOCK_BYTES:
        raise CryptoFailure("Ciphertext has an invalid length")

    iv, ciphertext = raw[:AES_BLOCK_BYTES], raw[AES_BLOCK_BYTES:]
    decryptor = Cipher(algorithms.AES(aes_key_bytes(key)), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()

    try:
        unpadder = sym_padding.PKCS7(algorithms.AES.block_size).unpadder()
        plaintext = unpadder.update(padded) + unpadder.finalize()
        return plaintext.decode("utf-8")
    except (ValueError, UnicodeDecodeError) as e:
        raise CryptoFailure(f"Ciphertext could not be decrypted: {e}")


def rsa_sign(message: str, private_key: RSAPrivateKey) -> str:
    """Sign with RSA PKCS#1 v1.5 over SHA-256, base64 encoded."""
    signature = private_key.sign(message.encode(), padding.PKCS1v15(), hashes.SHA256())
    return base64.b64encode(signature).decode("ascii")


def rsa_verify(message: str, signature: str, public_key: RSAPublicKey) -> bool:
    """
    Verify an RSA signature with the signer's public key.

    Returns:
        True if the signature is valid for message

    Raises:
        CryptoFailure: If the signature is not valid base64
    """
    raw = b64decode_strict(signature)
    try:
        public_key.verify(raw, message.encode(), padding.PKCS1v15(), hashes.SHA256())
    except InvalidSignature:
        return False
    return True
