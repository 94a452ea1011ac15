"""Tests for AES-GCM encryption of external OAuth tokens."""

import pytest

from stormtrooper.auth.security import (
    EncryptedToken,
    TokenDecryptionError,
    decrypt,
    encrypt,
    load_key,
)

KEY = "6b" * 32
OTHER_KEY = "a5" * 32


@pytest.mark.unit
class TestTokenEncryption:

    def test_decrypt_restores_plaintext(self):
        sealed = encrypt("EAABsbCS1iHgBAKZCZB", KEY)
        assert decrypt(sealed.cipher, KEY, sealed.iv, sealed.tag) == "EAABsbCS1iHgBAKZCZB"

    def test_parts_are_hex_with_expected_sizes(self):
        sealed = encrypt("token", KEY)
        assert isinstance(sealed, EncryptedToken)
        assert len(bytes.fromhex(sealed.iv)) == 12
        assert len(bytes.fromhex(sealed.tag)) == 16
        assert len(bytes.fromhex(sealed.cipher)) == len("token")

    def test_ciphertext_differs_between_calls(self):
        first = encrypt("same token", KEY)
        second = encrypt("same token", KEY)
        assert first.iv != second.iv
        assert first.cipher != second.cipher

    def test_plaintext_not_stored(self):
        sealed = encrypt("plain-access-token", KEY)
        assert "plain-access-token" not in sealed.cipher
        assert "plain-access-token".encode().hex() != sealed.cipher

    def test_wrong_key_fails(self):
        sealed = encrypt("token", KEY)
        with pytest.raises(TokenDecryptionError):
            decrypt(sealed.cipher, OTHER_KEY, sealed.iv, sealed.tag)

    def test_tampered_tag_fails(self):
        sealed = encrypt("token", KEY)
        bad_tag = ("00" if sealed.tag[:2] != "00" else "11") + sealed.tag[2:]
        with pytest.raises(TokenDecryptionError):
            decrypt(sealed.cipher, KEY, sealed.iv, bad_tag)

    def test_malformed_hex_fails(self):
        sealed = encrypt("token", KEY)
        with pytest.raises(TokenDecryptionError):
            decrypt("not-hex", KEY, sealed.iv, sealed.tag)


@pytest.mark.unit
class TestLoadKey:

    def test_accepts_32_bytes(self):
        assert load_key(KEY) == bytes.fromhex(KEY)

    def test_rejects_short_key(self):
        with pytest.raises(ValueError):
            load_key("6b" * 16)
