"""Tests for the contracts package.

Contract tests cover the types front-ends depend on without importing a
backend: the error family, the identifier type and the store protocol.
"""
