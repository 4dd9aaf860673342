# src/pastestore/contracts/errors.py
"""Error family for paste storage.

Every failure a caller can act on is a PasteError subclass carrying the
identifier it concerns. Filesystem and random-source failures are not
wrapped: they propagate as the OSError the platform raised.

Front-ends map these to user-facing outcomes, e.g.:

    PasteNotFoundError     -> 404
    PasteEncryptedError    -> 401 (prompt for a key)
    PasteInvalidKeyError   -> 401 (wrong key)
    MalformedMetadataError -> 500
"""


class PasteError(Exception):
    """Base class for paste storage errors."""

    def __init__(self, paste_id: str, message: str | None = None) -> None:
        self.paste_id = paste_id
        super().__init__(message or self._default_message())

    def _default_message(self) -> str:
        return f"Paste {self.paste_id} failed."


class PasteNotFoundError(PasteError):
    """No storage unit exists for the identifier."""

    def _default_message(self) -> str:
        return f"Paste {self.paste_id} was not found."


class PasteEncryptedError(PasteError):
    """The paste is encrypted and no key was supplied."""

    def _default_message(self) -> str:
        return f"Paste {self.paste_id} is encrypted."


class PasteInvalidKeyError(PasteError):
    """A key was supplied but does not match the stored verification tag."""

    def _default_message(self) -> str:
        return f"Invalid key for paste {self.paste_id}."


class MalformedMetadataError(PasteError):
    """Stored metadata cannot be decoded or names an unknown scheme."""

    def _default_message(self) -> str:
        return f"Paste {self.paste_id} has malformed metadata."


class InvalidPasteIDError(PasteError, ValueError):
    """Identifier is unsafe to use as a storage unit name."""

    def _default_message(self) -> str:
        return f"Invalid paste identifier: {self.paste_id!r}"
