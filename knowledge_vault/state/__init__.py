"""Owned client state: who is logged in, what is shown, which files exist.

Responsibilities:
    - Session token and display name, persisted across restarts
    - Single-slot toast and busy indicator
    - The user's file list, staged upload and active file for Q&A

Each component is the sole writer of its state; others go through its methods.
"""

from knowledge_vault.state.notifications import NotificationCenter
from knowledge_vault.state.registry import FileRegistry
from knowledge_vault.state.session import SessionManager, SessionStore, UserStorageSessionStore

__all__ = [
    "FileRegistry",
    "NotificationCenter",
    "SessionManager",
    "SessionStore",
    "UserStorageSessionStore",
]
