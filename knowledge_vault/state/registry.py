"""The user's file list, the staged upload and the active file for Q&A."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import TYPE_CHECKING

from knowledge_vault.client import BackendClient
from knowledge_vault.models import FailureKind, FileRecord, Outcome, StagedFile
from knowledge_vault.state.notifications import NotificationCenter

if TYPE_CHECKING:
    from knowledge_vault.orchestrator import RequestOrchestrator

logger = logging.getLogger(__name__)


class FileRegistry:
    """Owns the file collection and the active selection.

    The collection is only ever replaced wholesale from the backend; uploads
    and deletes are followed by a refresh, never by local insertion or removal.
    The active selection is not re-validated after a refresh, so it can point at
    a file that disappeared server-side until the next action touches it.
    """

    def __init__(
        self,
        client: BackendClient,
        orchestrator: RequestOrchestrator,
        notifications: NotificationCenter,
    ) -> None:
        self.files: list[FileRecord] = []
        self.active_file_id: str | None = None
        self.staged: StagedFile | None = None
        self._client = client
        self._orchestrator = orchestrator
        self._notifications = notifications

    @property
    def active_file(self) -> FileRecord | None:
        """Record of the active file, None if nothing is selected or it went stale."""
        return self.get(self.active_file_id) if self.active_file_id else None

    def get(self, file_id: str) -> FileRecord | None:
        return next((f for f in self.files if f.id == file_id), None)

    async def refresh(self) -> Outcome:
        """Replace the collection with the backend's current list."""

        def replace(files: list[FileRecord]) -> None:
            self.files = list(files)
            logger.info(f"Loaded {len(self.files)} files")

        return await self._orchestrator.run(
            lambda headers: self._client.list_files(headers),
            description="Loading files...",
            success_message="Files loaded",
            failure_message="Failed to load files",
            on_success=replace,
            notify_success=False,
            key="refresh",
        )

    def stage_file(
        self,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> StagedFile:
        """Pick the file the next ``upload()`` sends."""
        if content_type is None:
            content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        self.staged = StagedFile(filename=filename, content=content, content_type=content_type)
        return self.staged

    def stage_path(self, path: Path | str) -> StagedFile:
        path = Path(path)
        return self.stage_file(path.name, path.read_bytes())

    def unstage(self) -> None:
        self.staged = None

    async def upload(self, file: StagedFile | None = None) -> Outcome:
        """Upload the given or staged file, then refresh the list.

        Returns:
            Outcome of the upload call itself.
        """
        staged = file or self.staged
        if staged is None:
            self._notifications.error("Select a file")
            return Outcome.failed(FailureKind.VALIDATION)

        def unstage(_: object) -> None:
            self.staged = None

        outcome = await self._orchestrator.run(
            lambda headers: self._client.upload(staged, headers),
            description="Uploading file...",
            success_message="Upload complete",
            failure_message="Upload failed",
            on_success=unstage,
            key="upload",
        )
        if outcome.ok:
            await self.refresh()
        return outcome

    async def delete(self, file_id: str) -> Outcome:
        """Delete a file, refresh the list and drop the selection if it was active."""
        outcome = await self._orchestrator.run(
            lambda headers: self._client.delete_file(file_id, headers),
            description="Deleting file...",
            success_message="Delete complete",
            failure_message="Delete failed",
            key=f"delete:{file_id}",
        )
        if outcome.ok:
            await self.refresh()
            if file_id == self.active_file_id:
                self.active_file_id = None
        return outcome

    def select(self, file_id: str) -> None:
        """Make ``file_id`` the file questions are asked against."""
        self.active_file_id = file_id

    def clear_selection(self) -> None:
        self.active_file_id = None

    def clear(self) -> None:
        """Forget every file and the selection (used on logout)."""
        self.files = []
        self.active_file_id = None
