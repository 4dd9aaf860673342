# src/pastestore/core/security/cipher.py
"""AES in OFB mode for paste content.

OFB turns AES into a byte-stream cipher: ciphertext has exactly the length
of the plaintext and reads/writes of any size work without padding or
framing. Content on disk is therefore the bare ciphertext.

Scheme versions (stored as ``encryption_version`` metadata):
- "1": all-zero IV. Read-only; kept so older pastes stay readable.
- "2": random IV per write, stored as ``iv`` metadata. Written by default.

OFB has no integrity protection. Key correctness is established separately
by the verification tag (see verification.py).
"""

from __future__ import annotations

import secrets

from cryptography.hazmat.decrepit.ciphers.modes import OFB
from cryptography.hazmat.primitives.ciphers import Cipher, CipherContext, algorithms

BLOCK_SIZE = 16
KEY_SIZES = (16, 24, 32)

ENCRYPTION_VERSION_ZERO_IV = "1"
ENCRYPTION_VERSION_RANDOM_IV = "2"
ENCRYPTION_VERSION = ENCRYPTION_VERSION_RANDOM_IV
SUPPORTED_VERSIONS = frozenset({ENCRYPTION_VERSION_ZERO_IV, ENCRYPTION_VERSION_RANDOM_IV})

ZERO_IV = bytes(BLOCK_SIZE)


def validate_key(key: bytes) -> bytes:
    """Check key is usable as an AES key.

    Raises:
        ValueError: If key is not 16, 24 or 32 bytes
    """
    if not isinstance(key, bytes | bytearray):
        raise ValueError(f"Encryption key must be bytes, got {type(key).__name__}")
    if len(key) not in KEY_SIZES:
        raise ValueError(f"Encryption key must be 16, 24 or 32 bytes, got {len(key)}")
    return bytes(key)


def new_iv() -> bytes:
    """Generate a fresh random IV."""
    return secrets.token_bytes(BLOCK_SIZE)


def _cipher(key: bytes, iv: bytes) -> Cipher[OFB]:
    if len(iv) != BLOCK_SIZE:
        raise ValueError(f"IV must be {BLOCK_SIZE} bytes, got {len(iv)}")
    return Cipher(algorithms.AES(key), OFB(iv))


def encryptor(key: bytes, iv: bytes) -> CipherContext:
    """Return a streaming encryptor for key and iv."""
    return _cipher(key, iv).encryptor()


def decryptor(key: bytes, iv: bytes) -> CipherContext:
    """Return a streaming decryptor for key and iv."""
    return _cipher(key, iv).decryptor()
