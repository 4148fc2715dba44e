"""Unit tests for individual components in isolation.

Coverage:
    - config: Environment loading and validation
    - models: Wire aliases and normalisation
    - client: httpx outcomes mapped to the failure taxonomy
    - state: Notifications, session persistence
    - orchestrator: Busy state, failure policy, forced logout, single-flight guard

Uses httpx.MockTransport instead of a live backend.
"""
