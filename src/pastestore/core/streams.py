# src/pastestore/core/streams.py
"""Content streams for pastes.

PasteReader and PasteWriter are raw binary streams over a paste's content
file with an optional AES-OFB layer in between. Both are context managers
and release the file on every exit path.

Closing a PasteWriter is a two-step commit:
1. Finalize the cipher and close the content file (content is durable).
2. Commit the paste's metadata, including the IV this writer enciphered with.

A crash between the steps leaves content with stale or missing metadata,
never metadata pointing at missing content.
"""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import TYPE_CHECKING, BinaryIO

import structlog
from cryptography.hazmat.primitives.ciphers import CipherContext

if TYPE_CHECKING:
    from collections.abc import Buffer

    from pastestore.core.paste import Paste

logger = structlog.get_logger(__name__)


class PasteReader(io.RawIOBase):
    """Readable content stream, deciphered when the paste is encrypted."""

    def __init__(self, raw: BinaryIO, paste: Paste, decryptor: CipherContext | None = None) -> None:
        super().__init__()
        self._raw = raw
        self._decryptor = decryptor
        self.paste = paste

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Buffer) -> int:
        view = memoryview(buffer).cast("B")
        n = self._raw.readinto(view)
        if n and self._decryptor is not None:
            view[:n] = self._decryptor.update(view[:n])
        return n

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._raw.close()
        finally:
            super().close()


class PasteWriter(io.RawIOBase):
    """Writable content stream, enciphered when the paste is encrypted.

    Closing runs commit once, after the content file is closed. The store
    supplies commit bound to this paste and the IV of this write.
    """

    def __init__(
        self,
        raw: BinaryIO,
        paste: Paste,
        encryptor: CipherContext | None = None,
        *,
        commit: Callable[[], None],
    ) -> None:
        super().__init__()
        self._raw = raw
        self._encryptor = encryptor
        self._commit = commit
        self.paste = paste

    def writable(self) -> bool:
        return True

    def write(self, data: Buffer) -> int:
        if self.closed:
            raise ValueError("write to closed paste stream")
        chunk = bytes(data)
        if self._encryptor is not None:
            self._raw.write(self._encryptor.update(chunk))
        else:
            self._raw.write(chunk)
        return len(chunk)

    def _release(self) -> None:
        try:
            if self._encryptor is not None:
                self._raw.write(self._encryptor.finalize())
        finally:
            self._raw.close()

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._release()
        finally:
            super().close()
        logger.debug("Paste write stream closed", paste_id=str(self.paste.id))
        self._commit()

    def __del__(self) -> None:
        # Never commit from the garbage collector; just drop the file handle.
        if not self.closed:
            self._raw.close()
