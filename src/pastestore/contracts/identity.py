"""Paste identity.

These types answer: "How do we refer to a paste?"
"""


class PasteID(str):
    """Opaque identifier naming one paste.

    A str subclass so that equality, hashing and immutability come from the
    string value. The storage unit for a paste is named by ``str(paste_id)``.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"PasteID({str.__repr__(self)})"
