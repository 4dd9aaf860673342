# tests/contracts/test_paste_errors.py
"""Tests for the paste error family."""

import pytest

from pastestore.contracts import (
    InvalidPasteIDError,
    MalformedMetadataError,
    PasteEncryptedError,
    PasteError,
    PasteInvalidKeyError,
    PasteNotFoundError,
)


class TestPasteErrors:
    @pytest.mark.parametrize(
        "error_class",
        [PasteNotFoundError, PasteEncryptedError, PasteInvalidKeyError, MalformedMetadataError, InvalidPasteIDError],
    )
    def test_all_are_paste_errors(self, error_class: type[PasteError]) -> None:
        error = error_class("abcde")
        assert isinstance(error, PasteError)
        assert error.paste_id == "abcde"

    def test_kinds_are_distinguishable(self) -> None:
        """Front-ends branch on the class: encrypted vs wrong key must differ."""
        assert not issubclass(PasteInvalidKeyError, PasteEncryptedError)
        assert not issubclass(PasteEncryptedError, PasteInvalidKeyError)

    @pytest.mark.parametrize(
        ("error", "message"),
        [
            (PasteNotFoundError("abcde"), "Paste abcde was not found."),
            (PasteEncryptedError("abcde"), "Paste abcde is encrypted."),
            (PasteInvalidKeyError("abcde"), "Invalid key for paste abcde."),
            (MalformedMetadataError("abcde"), "Paste abcde has malformed metadata."),
        ],
    )
    def test_default_messages(self, error: PasteError, message: str) -> None:
        assert str(error) == message

    def test_custom_message(self) -> None:
        assert str(MalformedMetadataError("abcde", "bad iv")) == "bad iv"

    def test_invalid_id_is_value_error(self) -> None:
        assert isinstance(InvalidPasteIDError("../x"), ValueError)
