# src/pastestore/core/metadata.py
"""Side-channel metadata for paste content units.

Metadata (language, verification tag, IV, scheme version) is attached to a
content file without touching its bytes, so the content can be fed straight
through a stream cipher with no header or envelope.

Two backends:
- XattrMetadataStore: filesystem extended attributes (``user.paste.<name>``).
  Deleting the content file deletes its metadata in the same unlink.
- SidecarMetadataStore: a JSON companion file ``<unit>.meta`` for
  filesystems without user xattrs (tmpfs on some kernels, many network
  mounts, macOS without xattr support for the mount).

select_metadata_store() picks one for a storage root.
"""

from __future__ import annotations

import contextlib
import errno
import json
import os
import tempfile
from pathlib import Path
from typing import Literal, Protocol, runtime_checkable

import structlog

logger = structlog.get_logger(__name__)

MetadataBackend = Literal["auto", "xattr", "sidecar"]

XATTR_PREFIX = "user.paste."
SIDECAR_SUFFIX = ".meta"

# ENODATA on Linux, ENOATTR on BSD/macOS
_MISSING_ATTR_ERRNOS = frozenset(
    code for code in (getattr(errno, "ENODATA", None), getattr(errno, "ENOATTR", None)) if code is not None
)
_UNSUPPORTED_ERRNOS = frozenset(
    code for code in (getattr(errno, "ENOTSUP", None), getattr(errno, "EOPNOTSUPP", None), errno.EPERM) if code is not None
)


@runtime_checkable
class MetadataStore(Protocol):
    """Key/value metadata addressed by content unit path."""

    def get(self, path: Path, name: str, default: str) -> str:
        """Return the value for name, or default if it is not set."""
        ...

    def put(self, path: Path, name: str, value: str) -> None:
        """Set name to value."""
        ...

    def remove(self, path: Path, name: str) -> None:
        """Unset name. Unsetting an absent name is not an error."""
        ...

    def read_all(self, path: Path) -> dict[str, str]:
        """Return every name/value pair set on the unit."""
        ...

    def discard(self, path: Path) -> None:
        """Drop all metadata for a unit whose content was removed."""
        ...


class XattrMetadataStore:
    """Metadata in ``user.paste.*`` extended attributes."""

    def get(self, path: Path, name: str, default: str) -> str:
        try:
            value = os.getxattr(path, XATTR_PREFIX + name)
        except OSError as e:
            if e.errno in _MISSING_ATTR_ERRNOS:
                return default
            raise
        return value.decode("utf-8")

    def put(self, path: Path, name: str, value: str) -> None:
        os.setxattr(path, XATTR_PREFIX + name, value.encode("utf-8"))

    def remove(self, path: Path, name: str) -> None:
        try:
            os.removexattr(path, XATTR_PREFIX + name)
        except OSError as e:
            if e.errno not in _MISSING_ATTR_ERRNOS:
                raise

    def read_all(self, path: Path) -> dict[str, str]:
        return {
            attr[len(XATTR_PREFIX) :]: os.getxattr(path, attr).decode("utf-8")
            for attr in os.listxattr(path)
            if attr.startswith(XATTR_PREFIX)
        }

    def discard(self, path: Path) -> None:
        # Attributes go away with the file.
        return None


class SidecarMetadataStore:
    """Metadata in a JSON file beside the content unit.

    The sidecar is rewritten whole on every put/remove via a temp file and
    os.replace, so readers never see a partial document.
    """

    @staticmethod
    def sidecar_path(path: Path) -> Path:
        return path.with_name(path.name + SIDECAR_SUFFIX)

    def _load(self, path: Path) -> dict[str, str]:
        sidecar = self.sidecar_path(path)
        try:
            text = sidecar.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"Sidecar metadata {sidecar} is not a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def _store(self, path: Path, data: dict[str, str]) -> None:
        sidecar = self.sidecar_path(path)
        fd, tmp_name = tempfile.mkstemp(dir=sidecar.parent, prefix=".", suffix=SIDECAR_SUFFIX)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, sort_keys=True)
            os.replace(tmp_name, sidecar)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise

    def get(self, path: Path, name: str, default: str) -> str:
        return self._load(path).get(name, default)

    def put(self, path: Path, name: str, value: str) -> None:
        # Match xattr semantics: metadata needs an existing content unit.
        if not path.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))
        data = self._load(path)
        data[name] = value
        self._store(path, data)

    def remove(self, path: Path, name: str) -> None:
        data = self._load(path)
        if name in data:
            del data[name]
            self._store(path, data)

    def read_all(self, path: Path) -> dict[str, str]:
        return self._load(path)

    def discard(self, path: Path) -> None:
        with contextlib.suppress(FileNotFoundError):
            self.sidecar_path(path).unlink()


def xattrs_supported(directory: Path) -> bool:
    """Probe whether user extended attributes work under directory."""
    if not hasattr(os, "setxattr"):
        return False
    fd, probe = tempfile.mkstemp(dir=directory, prefix=".xattr-probe-")
    os.close(fd)
    try:
        os.setxattr(probe, XATTR_PREFIX + "probe", b"1")
    except OSError as e:
        if e.errno in _UNSUPPORTED_ERRNOS:
            return False
        raise
    finally:
        os.unlink(probe)
    return True


def select_metadata_store(directory: Path, backend: MetadataBackend = "auto") -> MetadataStore:
    """Pick the metadata backend for a storage root.

    Args:
        directory: Storage root (must exist for "auto")
        backend: "xattr", "sidecar", or "auto" to probe the filesystem

    Returns:
        MetadataStore instance
    """
    if backend == "xattr":
        return XattrMetadataStore()
    if backend == "sidecar":
        return SidecarMetadataStore()
    if backend != "auto":
        raise ValueError(f"Unknown metadata backend: {backend!r}")

    if xattrs_supported(directory):
        return XattrMetadataStore()
    logger.info("Extended attributes unsupported, using sidecar metadata", directory=str(directory))
    return SidecarMetadataStore()
