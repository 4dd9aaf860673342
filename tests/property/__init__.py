"""Property-based tests for pastestore.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of.

Test categories:
- core/: Identifier shape, content round trips, key verification
"""
