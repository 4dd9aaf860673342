"""
Pastestore: storage for short, identifiable text blobs.

Pastes are written to a filesystem root, tagged with a language label and
optionally encrypted at rest with a caller-supplied key.
"""

__version__ = "0.1.0"
