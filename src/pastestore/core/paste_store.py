# src/pastestore/core/paste_store.py
"""
Filesystem-backed paste store.

Each paste is one file under the store root, named by its identifier. The
file holds exactly the paste bytes (plaintext, or AES-OFB ciphertext for
encrypted pastes). Everything else lives in side-channel metadata:

    language            language tag, "text" if unset
    hmac                key verification tag (encrypted pastes only)
    encryption_version  cipher scheme version (encrypted pastes only)
    iv                  per-write IV (encryption_version "2" only)

No operation retries or recovers locally; every failure reaches the caller.
"""

from __future__ import annotations

from datetime import UTC, datetime
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from pastestore.contracts.errors import (
    InvalidPasteIDError,
    MalformedMetadataError,
    PasteEncryptedError,
    PasteInvalidKeyError,
    PasteNotFoundError,
)
from pastestore.contracts.identity import PasteID
from pastestore.contracts.paste_store import PasteCallback, noop_paste_callback
from pastestore.core.identifiers import decode_text, encode_text, validate_paste_id
from pastestore.core.metadata import MetadataBackend, MetadataStore, select_metadata_store
from pastestore.core.paste import DEFAULT_LANGUAGE, Paste
from pastestore.core.security import (
    ENCRYPTION_VERSION,
    ENCRYPTION_VERSION_ZERO_IV,
    KEY_SIZES,
    SUPPORTED_VERSIONS,
    ZERO_IV,
    construct_tag,
    decryptor,
    encryptor,
    new_iv,
    validate_key,
    verify_tag,
)
from pastestore.core.streams import PasteReader, PasteWriter

if TYPE_CHECKING:
    from cryptography.hazmat.primitives.ciphers import CipherContext

    from pastestore.core.config import PastestoreSettings, StoreSettings

__all__ = ["FilesystemPasteStore"]

logger = structlog.get_logger(__name__)

META_LANGUAGE = "language"
META_HMAC = "hmac"
META_ENCRYPTION_VERSION = "encryption_version"
META_IV = "iv"

_ENCRYPTION_KEYS = (META_HMAC, META_ENCRYPTION_VERSION, META_IV)


class FilesystemPasteStore:
    """Paste store rooted at a directory.

    Structure: base_path/<paste id>  (+ base_path/<paste id>.meta with
    sidecar metadata)

    Callbacks:
        on_update: called with the paste after a successful fetch, persist or
            write commit
        on_destroy: called with the paste after a successful destroy
    """

    def __init__(
        self,
        base_path: Path,
        *,
        metadata: MetadataStore | None = None,
        metadata_backend: MetadataBackend = "auto",
        create_directories: bool = True,
        on_update: PasteCallback = noop_paste_callback,
        on_destroy: PasteCallback = noop_paste_callback,
    ) -> None:
        """Initialize filesystem store.

        Args:
            base_path: Root directory for paste files
            metadata: Explicit metadata backend; overrides metadata_backend
            metadata_backend: "xattr", "sidecar" or "auto" (probe base_path)
            create_directories: Create base_path if it does not exist
            on_update: Update callback for external indexes/caches
            on_destroy: Destroy callback for external indexes/caches
        """
        self.base_path = Path(base_path)
        if create_directories:
            self.base_path.mkdir(parents=True, exist_ok=True)
        self.metadata = metadata if metadata is not None else select_metadata_store(self.base_path, metadata_backend)
        self.on_update = on_update
        self.on_destroy = on_destroy

    @classmethod
    def from_settings(
        cls,
        settings: PastestoreSettings | StoreSettings,
        *,
        on_update: PasteCallback = noop_paste_callback,
        on_destroy: PasteCallback = noop_paste_callback,
    ) -> FilesystemPasteStore:
        """Build a store from loaded configuration.

        Accepts the top-level settings or just the ``store`` section.
        """
        store_settings = getattr(settings, "store", settings)
        return cls(
            store_settings.base_path,
            metadata_backend=store_settings.metadata_backend,
            create_directories=store_settings.create_directories,
            on_update=on_update,
            on_destroy=on_destroy,
        )

    def _path_for_id(self, paste_id: str) -> Path:
        """Get filesystem path for a paste identifier.

        Raises:
            InvalidPasteIDError: If paste_id is not a safe file name or the
                resolved path escapes base_path
        """
        paste_id = validate_paste_id(paste_id)
        path = self.base_path / paste_id

        # Belt and braces: the pattern already excludes separators.
        resolved = path.resolve()
        if not resolved.is_relative_to(self.base_path.resolve()):
            raise InvalidPasteIDError(paste_id, f"Invalid paste identifier: {resolved} is not under {self.base_path}")

        return path

    def create(self, paste_id: PasteID, key: bytes | None = None) -> Paste:
        """Construct an unsaved paste. Nothing is written until its writer closes.

        The IV of an encrypted paste is chosen when a write stream opens, so
        a new paste has none.

        Raises:
            InvalidPasteIDError: If paste_id is unsafe as a file name
            ValueError: If key is not a valid AES key length
        """
        paste_id = validate_paste_id(paste_id)
        paste = Paste(id=paste_id, store=self)
        if key is not None:
            paste.encrypted = True
            paste.encryption_key = validate_key(key)
            paste.encryption_version = ENCRYPTION_VERSION
        logger.debug("Paste created", paste_id=str(paste_id), encrypted=paste.encrypted)
        return paste

    def _read_metadata(self, path: Path, paste_id: PasteID, name: str, default: str) -> str:
        try:
            return self.metadata.get(path, name, default)
        except ValueError as e:
            raise MalformedMetadataError(paste_id, f"Paste {paste_id} has unreadable {name} metadata: {e}") from e

    def _stored_iv(self, path: Path, paste_id: PasteID, version: str) -> bytes:
        if version == ENCRYPTION_VERSION_ZERO_IV:
            return ZERO_IV
        encoded = self._read_metadata(path, paste_id, META_IV, "")
        try:
            iv = decode_text(encoded)
        except ValueError as e:
            raise MalformedMetadataError(paste_id, f"Paste {paste_id} has malformed iv metadata") from e
        if len(iv) != len(ZERO_IV):
            raise MalformedMetadataError(paste_id, f"Paste {paste_id} iv is {len(iv)} bytes, expected {len(ZERO_IV)}")
        return iv

    def fetch(self, paste_id: PasteID, key: bytes | None = None) -> Paste:
        """Load a persisted paste.

        The key is opaque here: any bytes that do not reproduce the stored
        tag fail as PasteInvalidKeyError, whatever their length. An
        identifier no file could carry (e.g. "hello.txt") is reported as
        not found.

        Raises:
            PasteNotFoundError: No file for paste_id
            PasteEncryptedError: Paste is encrypted and key is None
            PasteInvalidKeyError: key does not match the stored tag
            MalformedMetadataError: Stored tag, version or IV cannot be decoded
        """
        try:
            paste_id = validate_paste_id(paste_id)
            path = self._path_for_id(paste_id)
        except InvalidPasteIDError as e:
            raise PasteNotFoundError(PasteID(str(paste_id)[:50])) from e
        try:
            stat = path.stat()
        except FileNotFoundError as e:
            raise PasteNotFoundError(paste_id) from e

        paste = Paste(
            id=paste_id,
            store=self,
            mtime=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
        )

        tag = self._read_metadata(path, paste_id, META_HMAC, "")
        if tag:
            paste.encrypted = True
            if key is None:
                raise PasteEncryptedError(paste_id)

            try:
                ok = verify_tag(paste_id, tag, key)
            except ValueError as e:
                raise MalformedMetadataError(paste_id, f"Paste {paste_id} has malformed hmac metadata") from e
            # HMAC zero-pads short keys, so a tag match alone does not make
            # a key usable; no paste is ever written under a non-AES length.
            if not ok or len(key) not in KEY_SIZES:
                logger.warning("Paste key verification failed", paste_id=str(paste_id))
                raise PasteInvalidKeyError(paste_id)

            # Written before versions existed: zero IV.
            version = self._read_metadata(path, paste_id, META_ENCRYPTION_VERSION, ENCRYPTION_VERSION_ZERO_IV)
            if version not in SUPPORTED_VERSIONS:
                raise MalformedMetadataError(paste_id, f"Paste {paste_id} uses unsupported encryption version {version!r}")

            paste.encryption_key = key
            paste.encryption_version = version
            paste.iv = self._stored_iv(path, paste_id, version)

        paste.language = self._read_metadata(path, paste_id, META_LANGUAGE, DEFAULT_LANGUAGE)

        logger.debug("Paste fetched", paste_id=str(paste_id), encrypted=paste.encrypted, language=paste.language)
        self.on_update(paste)
        return paste

    def persist(self, paste: Paste) -> None:
        """Write language and verification metadata for a paste.

        The scheme version and IV describe the bytes on disk; only a closing
        write stream sets them (see _commit_write).

        Each key is a separate filesystem write; a failure part way through
        leaves earlier keys written.

        Raises:
            OSError: If the content file is missing or metadata cannot be set
            ValueError: If the paste is encrypted but its key is not loaded
        """
        path = self._path_for_id(paste.id)
        self.metadata.put(path, META_LANGUAGE, paste.language)
        if paste.encrypted:
            self.metadata.put(path, META_HMAC, construct_tag(paste.id, self._persist_key(paste)))

        logger.debug("Paste persisted", paste_id=str(paste.id), encrypted=paste.encrypted, language=paste.language)
        self.on_update(paste)

    def _commit_write(self, paste: Paste, iv: bytes | None) -> None:
        """Record metadata for content a write stream has just closed.

        iv is the IV that content was enciphered with, None for plaintext.
        """
        path = self._path_for_id(paste.id)
        self.metadata.put(path, META_LANGUAGE, paste.language)

        if paste.encrypted:
            if iv is None:
                raise ValueError(f"Paste {paste.id} content was written without an IV")
            self.metadata.put(path, META_HMAC, construct_tag(paste.id, self._persist_key(paste)))
            self.metadata.put(path, META_ENCRYPTION_VERSION, ENCRYPTION_VERSION)
            self.metadata.put(path, META_IV, encode_text(iv))
            paste.encryption_version = ENCRYPTION_VERSION
            paste.iv = iv
        else:
            for name in _ENCRYPTION_KEYS:
                self.metadata.remove(path, name)

        logger.debug("Paste content committed", paste_id=str(paste.id), encrypted=paste.encrypted, language=paste.language)
        self.on_update(paste)

    def destroy(self, paste: Paste) -> None:
        """Remove a paste's content file (and sidecar metadata, if any).

        Raises:
            FileNotFoundError: If the paste does not exist
            OSError: If the file cannot be removed
        """
        path = self._path_for_id(paste.id)
        path.unlink()
        self.metadata.discard(path)
        logger.info("Paste destroyed", paste_id=str(paste.id))
        self.on_destroy(paste)

    def exists(self, paste_id: PasteID) -> bool:
        """Check whether a content file exists for paste_id."""
        return self._path_for_id(paste_id).exists()

    def open_read_stream(self, paste: Paste) -> PasteReader:
        """Open paste content for reading.

        Raises:
            OSError: If the content file cannot be opened
        """
        path = self._path_for_id(paste.id)
        raw = path.open("rb")
        if not paste.encrypted:
            return PasteReader(raw, paste)
        try:
            ctx = decryptor(self._require_key(paste), paste.iv or ZERO_IV)
        except BaseException:
            raw.close()
            raise
        return PasteReader(raw, paste, ctx)

    def open_write_stream(self, paste: Paste) -> PasteWriter:
        """Open paste content for writing, truncating any existing content.

        Encrypted pastes get a fresh IV once the file is open, so content is
        never rewritten under a previously used key/IV pair. The IV stays
        with the writer and reaches metadata (and the paste) only when the
        writer closes.

        Raises:
            OSError: If the content file cannot be created
            PasteEncryptedError: If the paste is encrypted but its key is not loaded
        """
        path = self._path_for_id(paste.id)
        key = self._require_key(paste) if paste.encrypted else None
        raw = path.open("wb")
        iv: bytes | None = None
        ctx: CipherContext | None = None
        if key is not None:
            try:
                iv = new_iv()
                ctx = encryptor(key, iv)
            except BaseException:
                raw.close()
                raise
        logger.debug("Paste write stream opened", paste_id=str(paste.id), encrypted=paste.encrypted)
        return PasteWriter(raw, paste, ctx, commit=partial(self._commit_write, paste, iv))

    @staticmethod
    def _require_key(paste: Paste) -> bytes:
        if paste.encryption_key is None:
            raise PasteEncryptedError(paste.id)
        return paste.encryption_key

    @staticmethod
    def _persist_key(paste: Paste) -> bytes:
        if paste.encryption_key is None:
            raise ValueError(f"Paste {paste.id} is encrypted but its key is not loaded")
        return paste.encryption_key
