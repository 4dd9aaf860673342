# src/pastestore/contracts/paste_store.py
"""PasteStore protocol for paste persistence backends.

This protocol defines the interface consumed by front-ends (HTTP handlers,
admin tooling) and implemented by:
- core/paste_store.py (FilesystemPasteStore)

Consolidated here so front-ends can type against the contract without
importing a concrete backend.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pastestore.contracts.identity import PasteID
    from pastestore.core.paste import Paste
    from pastestore.core.streams import PasteReader, PasteWriter

# Invoked with the affected paste after a successful persist/fetch (update)
# or destroy. Used by external indexes and caches.
PasteCallback = Callable[["Paste"], None]


def noop_paste_callback(paste: Paste) -> None:
    """Default lifecycle callback."""


@runtime_checkable
class PasteStore(Protocol):
    """Protocol for paste storage backends.

    A store owns one storage unit per identifier. Pastes it hands out keep
    a handle to the store for delegation; the store keeps no reference to
    any paste.
    """

    on_update: PasteCallback
    on_destroy: PasteCallback

    def create(self, paste_id: PasteID, key: bytes | None = None) -> Paste:
        """Construct a paste in memory. Never touches storage.

        Args:
            paste_id: Identifier for the new paste
            key: Encryption key; the paste is encrypted iff a key is given

        Returns:
            Unsaved Paste bound to this store
        """
        ...

    def fetch(self, paste_id: PasteID, key: bytes | None = None) -> Paste:
        """Load a persisted paste, verifying the key if it is encrypted.

        Raises:
            PasteNotFoundError: No storage unit for paste_id
            PasteEncryptedError: Paste is encrypted and key is None
            PasteInvalidKeyError: Key does not match the stored tag
            MalformedMetadataError: Stored tag cannot be decoded
        """
        ...

    def persist(self, paste: Paste) -> None:
        """Write the paste's language and verification tag to storage.

        Cipher scheme version and IV describe the stored content and are
        left as they are; a closing write stream records them.
        """
        ...

    def destroy(self, paste: Paste) -> None:
        """Remove the paste's storage unit.

        Raises:
            OSError: If the unit cannot be removed (including absent)
        """
        ...

    def open_read_stream(self, paste: Paste) -> PasteReader:
        """Open the paste content for reading, deciphering if encrypted."""
        ...

    def open_write_stream(self, paste: Paste) -> PasteWriter:
        """Open the paste content for writing, enciphering if encrypted.

        Closing the returned stream records the paste's metadata, including
        the scheme version and IV the new content was written with.
        """
        ...
