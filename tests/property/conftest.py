# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Usage:
    from tests.property.conftest import paste_content, aes_keys

    @given(content=paste_content, key=aes_keys)
    def test_something(content: bytes, key: bytes) -> None:
        ...
"""

from __future__ import annotations

from hypothesis import strategies as st

from pastestore.core.identifiers import ALPHABET

# Paste payloads, including empty and multi-block sizes
paste_content = st.binary(min_size=0, max_size=4096)

# Every AES key size the store accepts
aes_keys = st.sampled_from([16, 24, 32]).flatmap(lambda n: st.binary(min_size=n, max_size=n))

# Identifiers shaped like generated ones
paste_ids = st.text(alphabet=ALPHABET, min_size=5, max_size=5)

# Language tags as a front-end would send them
languages = st.text(alphabet=st.characters(min_codepoint=0x21, max_codepoint=0x7E), min_size=1, max_size=32)
