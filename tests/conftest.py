"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - backend: In-process fake of the document backend with one known user
    - config: Client configuration pointing at the fake, state in tmp_path
    - opened_urls: Records URLs the client asked to open
    - vault: Fully wired KnowledgeVault talking to the fake over ASGITransport
"""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport

from knowledge_vault.app import KnowledgeVault
from knowledge_vault.config import ClientConfig
from tests.fake_backend import FakeBackend

USER_EMAIL = "a@b.com"
USER_PASSWORD = "x"


@pytest.fixture
def backend() -> FakeBackend:
    """Return a fake backend with a single registered user."""
    fake = FakeBackend()
    fake.add_user(USER_EMAIL, USER_PASSWORD, name="Ada")
    return fake


@pytest.fixture
def state_file(tmp_path: Path) -> Path:
    return tmp_path / "session.json"


@pytest.fixture
def config(state_file: Path) -> ClientConfig:
    """Return client configuration isolated from the environment.

    Args:
        state_file: Per-test persisted session path.

    Returns:
        ClientConfig aimed at the in-process backend.
    """
    return ClientConfig(
        api_base_url="http://test",
        state_file=state_file,
        toast_seconds=2.5,
        request_timeout=5.0,
        serialize_operations=False,
    )


@pytest.fixture
def opened_urls() -> list[str]:
    return []


@pytest.fixture
async def vault(
    config: ClientConfig, backend: FakeBackend, opened_urls: list[str]
) -> AsyncIterator[KnowledgeVault]:
    """Create a vault wired to the fake backend.

    Yields:
        KnowledgeVault whose HTTP traffic goes to ``backend.app``.
    """
    transport = ASGITransport(app=backend.app)
    async with KnowledgeVault(config, transport=transport, open_url=opened_urls.append) as store:
        yield store
