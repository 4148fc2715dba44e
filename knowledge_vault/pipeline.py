"""Per-file pipeline stages, question answering and downloads.

Stage ordering is the backend's business: any stage may be triggered for any
file at any time, and a rejected prerequisite comes back as an ordinary
failure toast.
"""

import logging
import webbrowser
from collections.abc import Callable

from knowledge_vault.client import BackendClient
from knowledge_vault.errors import ResponseShapeError
from knowledge_vault.models import DownloadDescriptor, FailureKind, Outcome, PipelineStage, QAState
from knowledge_vault.orchestrator import RequestOrchestrator
from knowledge_vault.state.notifications import NotificationCenter
from knowledge_vault.state.registry import FileRegistry

logger = logging.getLogger(__name__)

UrlOpener = Callable[[str], object]


class PipelineController:
    """Issues stage triggers and questions through the request orchestrator.

    Owns the Q&A state; reads (never writes) the registry's active selection.
    """

    def __init__(
        self,
        client: BackendClient,
        orchestrator: RequestOrchestrator,
        registry: FileRegistry,
        notifications: NotificationCenter,
        open_url: UrlOpener = webbrowser.open_new_tab,
    ) -> None:
        """Initialize the controller.

        Args:
            client: Backend client.
            orchestrator: Wrapper every backend call goes through.
            registry: Source of the active file id.
            notifications: Target of local validation errors.
            open_url: Opens a download URL in a new browser context.
        """
        self.qa = QAState()
        self._client = client
        self._orchestrator = orchestrator
        self._registry = registry
        self._notifications = notifications
        self._open_url = open_url

    async def run_stage(self, file_id: str, stage: PipelineStage | str) -> Outcome:
        """Trigger one processing stage for a file."""
        stage = PipelineStage(stage)
        return await self._orchestrator.run(
            lambda headers: self._client.run_stage(file_id, stage, headers),
            description=f"{stage.label} in progress...",
            success_message=f"{stage.label} complete",
            failure_message=f"{stage.label} failed",
            key=f"stage:{stage.name.lower()}:{file_id}",
        )

    async def extract(self, file_id: str) -> Outcome:
        return await self.run_stage(file_id, PipelineStage.EXTRACT)

    async def create_chunks(self, file_id: str) -> Outcome:
        return await self.run_stage(file_id, PipelineStage.CHUNK)

    async def create_embeddings(self, file_id: str) -> Outcome:
        return await self.run_stage(file_id, PipelineStage.EMBED)

    async def ask(self, question: str | None = None) -> Outcome:
        """Ask the current question about the active file.

        Args:
            question: Replaces the composed question when given.

        Returns:
            Outcome whose value is the answer on success. Validation failures
            never reach the backend.
        """
        if question is not None:
            self.qa.question = question

        file_id = self._registry.active_file_id
        if not file_id:
            self._notifications.error("Select a file")
            return Outcome.failed(FailureKind.VALIDATION)
        if not self.qa.question.strip():
            self._notifications.error("Ask a question")
            return Outcome.failed(FailureKind.VALIDATION)

        asked = self.qa.question

        def store_answer(answer: str) -> None:
            self.qa.answer = answer or ""

        return await self._orchestrator.run(
            lambda headers: self._client.ask(asked, file_id, headers),
            description="Asking AI...",
            success_message="Answer ready",
            failure_message="AI failed",
            on_success=store_answer,
            key="ask",
        )

    def clear_answer(self) -> None:
        """Reset question and answer; also run on logout."""
        self.qa.question = ""
        self.qa.answer = None

    async def download(self, file_id: str) -> Outcome:
        """Fetch a file's download URL and open it."""

        def open_descriptor(descriptor: DownloadDescriptor) -> None:
            if not descriptor.url:
                raise ResponseShapeError("File URL missing")
            self._open_url(descriptor.url)

        return await self._orchestrator.run(
            lambda headers: self._client.get_file_url(file_id, headers),
            description="Preparing file...",
            success_message="File opened",
            failure_message="Download failed",
            on_success=open_descriptor,
            key=f"download:{file_id}",
        )
