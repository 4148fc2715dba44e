"""Test package for the knowledge vault client.

Structure:
    - unit/: Individual components with httpx.MockTransport standing in for the network
    - integration/: Full user flows against an in-process fake backend
    - fake_backend.py: FastAPI implementation of the backend contract

Leverages pytest with pytest-asyncio for async tests and pytest-check for
soft assertions.
"""
