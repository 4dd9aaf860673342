# tests/conftest.py
"""Shared test fixtures.

Store fixtures:
- store: FilesystemPasteStore using sidecar metadata (works on any filesystem)
- any_store: Parametrized over sidecar and xattr metadata; the xattr case
  is skipped where the test filesystem lacks user extended attributes

Key fixtures follow the documented scenarios: a 32-byte all-zero key and a
32-byte all-0xFF key.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from pastestore.core.metadata import xattrs_supported
from pastestore.core.paste_store import FilesystemPasteStore

ZERO_KEY = bytes(32)
FF_KEY = b"\xff" * 32


@pytest.fixture
def zero_key() -> bytes:
    return ZERO_KEY


@pytest.fixture
def ff_key() -> bytes:
    return FF_KEY


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    root = tmp_path / "pastes"
    root.mkdir()
    return root


@pytest.fixture
def store(store_root: Path) -> FilesystemPasteStore:
    """Store with sidecar metadata."""
    return FilesystemPasteStore(store_root, metadata_backend="sidecar")


@pytest.fixture(params=["sidecar", "xattr"])
def any_store(request: pytest.FixtureRequest, store_root: Path) -> FilesystemPasteStore:
    """Store over each metadata backend the test filesystem supports."""
    if request.param == "xattr" and not xattrs_supported(store_root):
        pytest.skip("filesystem does not support user extended attributes")
    return FilesystemPasteStore(store_root, metadata_backend=request.param)


# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
