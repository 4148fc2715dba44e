"""Application store wiring every component together.

One ``KnowledgeVault`` is the whole client state: build it, ``await start()``
to restore a persisted session, hand it to the UI, ``await aclose()`` on
shutdown.
"""

import logging

import httpx

from knowledge_vault.client import BackendClient
from knowledge_vault.config import ClientConfig, get_client_config
from knowledge_vault.orchestrator import RequestOrchestrator
from knowledge_vault.pipeline import PipelineController, UrlOpener
from knowledge_vault.state import FileRegistry, NotificationCenter, SessionManager, SessionStore
from knowledge_vault.state.session import SessionBackend

logger = logging.getLogger(__name__)


class KnowledgeVault:
    """Owns the session, notifications, registry, orchestrator and pipeline."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        open_url: UrlOpener | None = None,
        store: SessionBackend | None = None,
    ) -> None:
        """Build and wire the components.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport for the backend client.
            open_url: Optional opener for download URLs.
            store: Where the session is persisted. Defaults to the
                   configured state file.
        """
        self.config = config or get_client_config()
        self.client = BackendClient(self.config, transport=transport)
        self.notifications = NotificationCenter(self.config.toast_seconds)
        self.session = SessionManager(
            self.client, self.notifications, store or SessionStore(self.config.state_file)
        )
        self.orchestrator = RequestOrchestrator(
            self.session, self.notifications, serialize=self.config.serialize_operations
        )
        self.session.bind(self.orchestrator)
        self.registry = FileRegistry(self.client, self.orchestrator, self.notifications)

        pipeline_kwargs = {"open_url": open_url} if open_url is not None else {}
        self.pipeline = PipelineController(
            self.client, self.orchestrator, self.registry, self.notifications, **pipeline_kwargs
        )

        self.session.on_login(self.registry.refresh)
        self.session.on_logout(self.registry.clear)
        self.session.on_logout(self.pipeline.clear_answer)

    async def start(self) -> None:
        """Restore the persisted session and load files if it holds a token."""
        if self.session.restore():
            await self.registry.refresh()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "KnowledgeVault":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
