"""Integration tests for the wired KnowledgeVault store.

Coverage:
    - Signup, login, logout and restore across restarts
    - Upload, refresh, delete and active-file selection
    - Pipeline stages, question answering and downloads
    - Forced logout on an expired token from any operation

Runs against tests/fake_backend.py through httpx.ASGITransport, no network.
"""
