# src/pastestore/core/paste.py
"""In-memory handle for one paste.

A Paste is what a store hands out: identity, language tag, encryption
state and a handle back to the store that produced it. The handle is used
only to delegate persist/destroy/stream calls; the store never holds a
reference to a Paste.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from pastestore.contracts.identity import PasteID

if TYPE_CHECKING:
    from pastestore.contracts.paste_store import PasteStore
    from pastestore.core.streams import PasteReader, PasteWriter

DEFAULT_LANGUAGE = "text"


@dataclass(eq=False)
class Paste:
    """One stored paste.

    Attributes:
        id: Identifier, fixed for the lifetime of the handle
        store: Store that produced this paste (delegation only)
        language: Language tag, "text" when none was stored
        encrypted: True iff the paste has a verification tag
        mtime: Modification time of the content, set by fetch

    The encryption key and IV are held only in memory and excluded from
    repr so they never end up in logs.
    """

    id: PasteID
    store: PasteStore = field(repr=False)
    language: str = DEFAULT_LANGUAGE
    encrypted: bool = False
    mtime: datetime | None = None
    encryption_key: bytes | None = field(default=None, repr=False)
    encryption_version: str | None = field(default=None, repr=False)
    iv: bytes | None = field(default=None, repr=False)

    def __setattr__(self, name: str, value: object) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("Paste id cannot be changed")
        super().__setattr__(name, value)

    @property
    def last_modified(self) -> datetime | None:
        """Content modification time, or None for an unsaved paste."""
        return self.mtime

    def save(self) -> None:
        """Persist metadata through the owning store."""
        self.store.persist(self)

    def destroy(self) -> None:
        """Remove the paste through the owning store."""
        self.store.destroy(self)

    def reader(self) -> PasteReader:
        """Open the content for reading."""
        return self.store.open_read_stream(self)

    def writer(self) -> PasteWriter:
        """Open the content for writing. Closing it saves metadata."""
        return self.store.open_write_stream(self)
