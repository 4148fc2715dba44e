"""AI Knowledge Vault - client for a document Q&A backend.

Drives uploaded documents through the backend's processing pipeline
(extract, chunk, embed) and asks questions grounded in one selected document.
Combines httpx for backend calls, Pydantic for state and wire models,
and NiceGUI for the interface.

Components:
    - client: HTTP access to the backend with typed failures
    - state: session, notifications and file registry
    - orchestrator: busy state, failure policy and forced logout
    - pipeline: stage triggers, question answering and downloads
    - ui: Web interface over the application store
"""

__version__ = "0.1.0"
