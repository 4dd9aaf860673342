"""Paste identifier generation and validation.

Identifiers are five symbols from a 32-symbol alphabet that leaves out
visually ambiguous characters (no i, l, 0 or 1). They are derived from
three random bytes, so roughly 16.7M identifiers are possible.

Generation does not check storage for collisions. Callers that need
uniqueness must check for an existing paste and generate again.

The same alphabet doubles as the text encoding for binary metadata values
(verification tags, IVs) stored in the side-channel.
"""

from __future__ import annotations

import base64
import binascii
import re
import secrets

from pastestore.contracts.errors import InvalidPasteIDError
from pastestore.contracts.identity import PasteID

# Order matters: symbol N encodes the 5-bit value N.
ALPHABET = "abcdefghjkmnopqrstuvwxyz23456789"
ID_LENGTH = 5
_RANDOM_BYTES = 3

_STANDARD_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_TO_PASTE_ALPHABET = str.maketrans(_STANDARD_ALPHABET, ALPHABET)
_FROM_PASTE_ALPHABET = str.maketrans(ALPHABET, _STANDARD_ALPHABET)

# Safe as a single path component, and never contains "." so it cannot
# collide with sidecar metadata files.
_PASTE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


def encode_text(data: bytes) -> str:
    """Encode bytes as padded base32 over the identifier alphabet."""
    return base64.b32encode(data).decode("ascii").translate(_TO_PASTE_ALPHABET)


def decode_text(text: str) -> bytes:
    """Decode a value produced by encode_text.

    Raises:
        ValueError: If text is not valid padded base32 over the alphabet
    """
    if any(c not in ALPHABET and c != "=" for c in text):
        raise ValueError(f"Invalid symbol in encoded value {text[:50]!r}")
    try:
        return base64.b32decode(text.translate(_FROM_PASTE_ALPHABET))
    except binascii.Error as e:
        raise ValueError(f"Invalid encoded value {text[:50]!r}: {e}") from e


def generate_paste_id() -> PasteID:
    """Generate a new random paste identifier.

    Raises:
        OSError: If the system random source is unavailable
    """
    return PasteID(encode_text(secrets.token_bytes(_RANDOM_BYTES))[:ID_LENGTH])


def validate_paste_id(paste_id: str) -> PasteID:
    """Check a caller-supplied identifier is safe to name a storage unit.

    Accepts generated identifiers and any other name made of letters, digits,
    ``_`` and ``-``.

    Raises:
        InvalidPasteIDError: If paste_id could not safely name a file
    """
    if not isinstance(paste_id, str) or not _PASTE_ID_PATTERN.match(paste_id):
        raise InvalidPasteIDError(str(paste_id)[:50])
    return paste_id if isinstance(paste_id, PasteID) else PasteID(paste_id)
