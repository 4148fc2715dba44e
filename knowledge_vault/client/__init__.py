"""HTTP access to the document backend.

Responsibilities:
    - One httpx.AsyncClient per backend, bound to the configured base URL
    - Request bodies and replies validated with Pydantic models
    - httpx outcomes translated into the knowledge_vault.errors taxonomy

Knows nothing about sessions, notifications or busy state; callers pass the
authorization headers for each request.
"""

from knowledge_vault.client.backend import BackendClient

__all__ = ["BackendClient"]
