# src/pastestore/core/security/verification.py
"""Key verification tags using HMAC-SHA256.

The encryption key for a paste is never stored. Instead we store an
HMAC-SHA256 of the paste identifier keyed by the encryption key. A
candidate key is accepted iff it reproduces the stored tag, so a wrong key
is rejected before any content is read or deciphered.

Usage:
    from pastestore.core.security import construct_tag, verify_tag

    tag = construct_tag(paste_id, key)
    verify_tag(paste_id, tag, candidate_key)  # -> bool
"""

from __future__ import annotations

import hashlib
import hmac

from pastestore.core.identifiers import decode_text, encode_text


def construct_mac(paste_id: str, key: bytes) -> bytes:
    """Compute the raw HMAC-SHA256 of paste_id under key."""
    return hmac.new(
        key=key,
        msg=paste_id.encode("utf-8"),
        digestmod=hashlib.sha256,
    ).digest()


def check_mac(paste_id: str, mac: bytes, key: bytes) -> bool:
    """Check mac was produced for paste_id under key.

    Uses a timing-safe comparison.
    """
    return hmac.compare_digest(construct_mac(paste_id, key), mac)


def construct_tag(paste_id: str, key: bytes) -> str:
    """Compute the text-encoded verification tag stored in metadata.

    Example:
        >>> tag = construct_tag("abcde", b"\\x00" * 32)
        >>> tag == construct_tag("abcde", b"\\x00" * 32)
        True
    """
    return encode_text(construct_mac(paste_id, key))


def verify_tag(paste_id: str, tag: str, key: bytes) -> bool:
    """Check a stored text tag against a candidate key.

    Raises:
        ValueError: If tag cannot be decoded
    """
    return check_mac(paste_id, decode_text(tag), key)
