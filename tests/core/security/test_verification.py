# tests/core/security/test_verification.py
"""Tests for key verification tags."""

import hashlib
import hmac

import pytest

from pastestore.core.identifiers import ALPHABET, decode_text
from pastestore.core.security.verification import check_mac, construct_mac, construct_tag, verify_tag


class TestConstructMac:
    """Raw HMAC over the identifier."""

    def test_is_hmac_sha256_of_identifier(self) -> None:
        """Locks the algorithm to HMAC-SHA256 over the UTF-8 identifier."""
        key = b"k" * 32
        expected = hmac.new(key, b"abcde", hashlib.sha256).digest()
        assert construct_mac("abcde", key) == expected

    def test_is_deterministic(self) -> None:
        assert construct_mac("abcde", b"key") == construct_mac("abcde", b"key")

    def test_differs_by_identifier(self) -> None:
        assert construct_mac("abcde", b"key") != construct_mac("abcdf", b"key")

    def test_differs_by_key(self) -> None:
        assert construct_mac("abcde", b"key-1") != construct_mac("abcde", b"key-2")


class TestCheckMac:
    def test_accepts_matching_key(self) -> None:
        mac = construct_mac("abcde", b"key")
        assert check_mac("abcde", mac, b"key") is True

    def test_rejects_wrong_key(self) -> None:
        mac = construct_mac("abcde", b"key")
        assert check_mac("abcde", mac, b"other") is False

    def test_rejects_truncated_mac(self) -> None:
        mac = construct_mac("abcde", b"key")
        assert check_mac("abcde", mac[:-1], b"key") is False


class TestTags:
    """Text-encoded tags as stored in metadata."""

    def test_tag_uses_identifier_alphabet(self) -> None:
        tag = construct_tag("abcde", bytes(32))
        assert set(tag.rstrip("=")) <= set(ALPHABET)

    def test_tag_decodes_to_mac(self) -> None:
        key = bytes(32)
        assert decode_text(construct_tag("abcde", key)) == construct_mac("abcde", key)

    def test_tag_never_contains_key(self) -> None:
        key = b"plain-key-material-32-bytes-long"
        assert "plain-key" not in construct_tag("abcde", key)

    def test_verify_tag_round_trip(self) -> None:
        tag = construct_tag("abcde", bytes(32))
        assert verify_tag("abcde", tag, bytes(32)) is True
        assert verify_tag("abcde", tag, b"\xff" * 32) is False

    def test_verify_tag_rejects_undecodable_tag(self) -> None:
        with pytest.raises(ValueError):
            verify_tag("abcde", "!!not-a-tag!!", bytes(32))
