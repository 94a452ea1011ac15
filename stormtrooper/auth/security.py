"""Encryption of external OAuth tokens at rest.

Tokens are sealed with AES-256-GCM. Each encrypted value is stored as three
hex strings (ciphertext, IV, tag) so they map directly onto the
``access_token``/``at_iv``/``at_tag`` column triples.
"""

import os
from dataclasses import dataclass

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

IV_SIZE = 12
TAG_SIZE = 16
KEY_SIZE = 32


class TokenDecryptionError(Exception):
    """Raised when an encrypted token cannot be decrypted."""
    pass


@dataclass(frozen=True)
class EncryptedToken:
    """Hex encoded AES-GCM ciphertext with its IV and tag."""

    cipher: str
    iv: str
    tag: str


def load_key(hex_key: str) -> bytes:
    """Decode a hex encoded 256-bit key.

    Raises:
        ValueError: If the key is not 32 bytes of hex.
    """
    key = bytes.fromhex(hex_key)
    if len(key) != KEY_SIZE:
        raise ValueError(f"Encryption key must be {KEY_SIZE} bytes, got {len(key)}")
    return key


def encrypt(plaintext: str, key: str) -> EncryptedToken:
    """Encrypt a token with AES-256-GCM.

    Args:
        plaintext: Token to encrypt.
        key: Hex encoded 256-bit key.

    Returns:
        EncryptedToken holding ciphertext, IV and tag as hex.
    """
    iv = os.urandom(IV_SIZE)
    sealed = AESGCM(load_key(key)).encrypt(iv, plaintext.encode("utf-8"), None)
    # AESGCM appends the tag to the ciphertext
    return EncryptedToken(
        cipher=sealed[:-TAG_SIZE].hex(),
        iv=iv.hex(),
        tag=sealed[-TAG_SIZE:].hex(),
    )


def decrypt(cipher: str, key: str, iv: str, tag: str) -> str:
    """Decrypt a token produced by :func:`encrypt`.

    Raises:
        TokenDecryptionError: If the key, IV or tag is wrong or the
            ciphertext was tampered with.
    """
    try:
        sealed = bytes.fromhex(cipher) + bytes.fromhex(tag)
        plaintext = AESGCM(load_key(key)).decrypt(bytes.fromhex(iv), sealed, None)
    except (InvalidTag, ValueError) as e:
        raise TokenDecryptionError(f"Unable to decrypt token: {type(e).__name__}") from e
    return plaintext.decode("utf-8")
