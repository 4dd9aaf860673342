"""Core paste storage: identifiers, entity, metadata, streams and the
filesystem store.

Exports:
- FilesystemPasteStore: Directory-backed PasteStore implementation
- Paste: In-memory paste handle
- generate_paste_id/validate_paste_id: Identifier helpers
- load_settings/PastestoreSettings: Configuration
- configure_logging/get_logger: Structured logging
"""

from pastestore.core.config import LoggingSettings, PastestoreSettings, StoreSettings, load_settings
from pastestore.core.identifiers import ALPHABET, ID_LENGTH, generate_paste_id, validate_paste_id
from pastestore.core.logging import configure_logging, configure_logging_from_settings, get_logger
from pastestore.core.metadata import MetadataStore, SidecarMetadataStore, XattrMetadataStore, select_metadata_store
from pastestore.core.paste import DEFAULT_LANGUAGE, Paste
from pastestore.core.paste_store import FilesystemPasteStore
from pastestore.core.streams import PasteReader, PasteWriter

__all__ = [
    # Identifiers
    "ALPHABET",
    "ID_LENGTH",
    "generate_paste_id",
    "validate_paste_id",
    # Entity and store
    "DEFAULT_LANGUAGE",
    "FilesystemPasteStore",
    "Paste",
    "PasteReader",
    "PasteWriter",
    # Metadata
    "MetadataStore",
    "SidecarMetadataStore",
    "XattrMetadataStore",
    "select_metadata_store",
    # Config and logging
    "LoggingSettings",
    "PastestoreSettings",
    "StoreSettings",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "load_settings",
]
