# tests/core/security/test_cipher.py
"""Tests for the AES-OFB content cipher."""

import warnings

import pytest

from pastestore.core.security.cipher import (
    BLOCK_SIZE,
    ENCRYPTION_VERSION,
    ENCRYPTION_VERSION_RANDOM_IV,
    SUPPORTED_VERSIONS,
    ZERO_IV,
    decryptor,
    encryptor,
    new_iv,
    validate_key,
)


class TestValidateKey:
    @pytest.mark.parametrize("size", [16, 24, 32])
    def test_accepts_aes_key_sizes(self, size: int) -> None:
        assert validate_key(bytes(size)) == bytes(size)

    @pytest.mark.parametrize("size", [0, 1, 15, 31, 33, 64])
    def test_rejects_other_sizes(self, size: int) -> None:
        with pytest.raises(ValueError, match="16, 24 or 32 bytes"):
            validate_key(bytes(size))

    def test_rejects_text(self) -> None:
        with pytest.raises(ValueError, match="must be bytes"):
            validate_key("0" * 32)  # type: ignore[arg-type]

    def test_bytearray_is_copied_to_bytes(self) -> None:
        result = validate_key(bytearray(16))
        assert type(result) is bytes


class TestVersions:
    def test_new_content_uses_random_iv_scheme(self) -> None:
        assert ENCRYPTION_VERSION == ENCRYPTION_VERSION_RANDOM_IV

    def test_zero_iv_scheme_still_readable(self) -> None:
        assert SUPPORTED_VERSIONS == {"1", "2"}

    def test_zero_iv_is_one_block(self) -> None:
        assert ZERO_IV == b"\x00" * BLOCK_SIZE


class TestStreamCipher:
    """OFB behaves as a length-preserving byte-stream cipher."""

    def test_ciphertext_length_matches_plaintext(self) -> None:
        for size in (0, 1, 15, 16, 17, 1000):
            enc = encryptor(bytes(32), new_iv())
            assert len(enc.update(b"x" * size) + enc.finalize()) == size

    def test_chunked_encryption_matches_one_shot(self) -> None:
        key, iv = bytes(32), new_iv()
        data = bytes(range(256)) * 3

        one_shot = encryptor(key, iv).update(data)

        enc = encryptor(key, iv)
        chunked = b"".join(enc.update(data[i : i + 7]) for i in range(0, len(data), 7))

        assert chunked == one_shot

    def test_decrypt_recovers_plaintext(self) -> None:
        key, iv = b"\x01" * 16, new_iv()
        ciphertext = encryptor(key, iv).update(b"secret")
        assert decryptor(key, iv).update(ciphertext) == b"secret"

    def test_wrong_key_garbles(self) -> None:
        iv = new_iv()
        ciphertext = encryptor(bytes(32), iv).update(b"secret")
        assert decryptor(b"\xff" * 32, iv).update(ciphertext) != b"secret"

    def test_iv_changes_ciphertext(self) -> None:
        key = bytes(32)
        first = encryptor(key, ZERO_IV).update(b"secret")
        second = encryptor(key, b"\x01" * BLOCK_SIZE).update(b"secret")
        assert first != second

    def test_new_iv_is_random_block(self) -> None:
        ivs = {new_iv() for _ in range(50)}
        assert len(ivs) == 50
        assert all(len(iv) == BLOCK_SIZE for iv in ivs)

    def test_rejects_short_iv(self) -> None:
        with pytest.raises(ValueError, match="IV must be 16 bytes"):
            encryptor(bytes(32), b"\x00" * 8)

    def test_no_deprecation_warning(self) -> None:
        import importlib

        import pastestore.core.security.cipher as cipher

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            importlib.reload(cipher)
            enc = cipher.encryptor(bytes(32), cipher.new_iv())
            enc.update(b"data")
            enc.finalize()
