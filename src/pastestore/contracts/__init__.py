"""Shared contracts for pastestore.

Exports the store protocol, the identifier type and the error family so
front-ends can depend on them without importing a backend.
"""

from pastestore.contracts.errors import (
    InvalidPasteIDError,
    MalformedMetadataError,
    PasteEncryptedError,
    PasteError,
    PasteInvalidKeyError,
    PasteNotFoundError,
)
from pastestore.contracts.identity import PasteID
from pastestore.contracts.paste_store import PasteCallback, PasteStore, noop_paste_callback

__all__ = [
    # Identity
    "PasteID",
    # Store contract
    "PasteCallback",
    "PasteStore",
    "noop_paste_callback",
    # Errors
    "InvalidPasteIDError",
    "MalformedMetadataError",
    "PasteEncryptedError",
    "PasteError",
    "PasteInvalidKeyError",
    "PasteNotFoundError",
]
