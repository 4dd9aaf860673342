# src/pastestore/core/security/__init__.py
"""Encryption at rest for pastes.

Exports:
- encryptor/decryptor: AES-OFB stream contexts for paste content
- validate_key/new_iv: Key and IV helpers
- construct_tag/verify_tag: HMAC-SHA256 key verification tags
- ENCRYPTION_VERSION: Scheme version written for new content
"""

from pastestore.core.security.cipher import (
    ENCRYPTION_VERSION,
    ENCRYPTION_VERSION_RANDOM_IV,
    ENCRYPTION_VERSION_ZERO_IV,
    KEY_SIZES,
    SUPPORTED_VERSIONS,
    ZERO_IV,
    decryptor,
    encryptor,
    new_iv,
    validate_key,
)
from pastestore.core.security.verification import (
    check_mac,
    construct_mac,
    construct_tag,
    verify_tag,
)

__all__ = [
    # Cipher
    "ENCRYPTION_VERSION",
    "ENCRYPTION_VERSION_RANDOM_IV",
    "ENCRYPTION_VERSION_ZERO_IV",
    "KEY_SIZES",
    "SUPPORTED_VERSIONS",
    "ZERO_IV",
    "decryptor",
    "encryptor",
    "new_iv",
    "validate_key",
    # Verification
    "check_mac",
    "construct_mac",
    "construct_tag",
    "verify_tag",
]
