"""Async client for the document backend's HTTP contract."""

import json
import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from knowledge_vault.config import ClientConfig
from knowledge_vault.errors import (
    AuthorizationError,
    BackendError,
    RequestTimeout,
    ResponseShapeError,
    TransportError,
)
from knowledge_vault.models import (
    AskRequest,
    AskResponse,
    DownloadDescriptor,
    FileRecord,
    LoginRequest,
    LoginResponse,
    PipelineStage,
    SignupRequest,
    StagedFile,
)

logger = logging.getLogger(__name__)

_FILE_LIST = TypeAdapter(list[FileRecord])

Headers = dict[str, str]


def _error_message(response: httpx.Response) -> str | None:
    """Pull the human-readable ``message`` out of an error body, if any."""
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


class BackendClient:
    """Thin typed wrapper over the backend endpoints.

    Every method raises a ``VaultError`` subclass on failure:
    ``AuthorizationError`` for 401, ``BackendError`` for other error statuses,
    ``RequestTimeout`` / ``TransportError`` when no response arrived, and
    ``ResponseShapeError`` when a 2xx body is missing a required field.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client configuration (base URL and timeout).
            transport: Optional httpx transport, used by tests to route
                       requests to an in-process app.
        """
        self._http = httpx.AsyncClient(
            base_url=config.api_base_url,
            timeout=config.request_timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _send(
        self,
        method: str,
        path: str,
        headers: Headers | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        if self._http.is_closed:
            raise TransportError(f"{method} {path} sent after the client was closed")
        try:
            response = await self._http.request(method, path, headers=headers, **kwargs)
            logger.debug(f"{method} {path} -> {response.status_code}")
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise RequestTimeout(f"{method} {path} timed out") from e
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            if e.response.status_code == httpx.codes.UNAUTHORIZED:
                raise AuthorizationError(message) from e
            raise BackendError(e.response.status_code, message) from e
        except httpx.RequestError as e:
            raise TransportError(f"Connection failed: {e}") from e
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ResponseShapeError("Backend returned malformed JSON") from e

    async def signup(self, name: str, email: str, password: str) -> None:
        body = SignupRequest(name=name, email=email, password=password)
        await self._send("POST", "/signup", json=body.model_dump())

    async def login(self, email: str, password: str) -> str:
        """Exchange credentials for a bearer token.

        Returns:
            The session token.

        Raises:
            ResponseShapeError: If the reply carries no token.
        """
        body = LoginRequest(email=email, password=password)
        response = await self._send("POST", "/login", json=body.model_dump())
        try:
            return LoginResponse.model_validate(self._json(response)).token
        except ValidationError as e:
            raise ResponseShapeError("Login token missing") from e

    async def list_files(self, headers: Headers) -> list[FileRecord]:
        response = await self._send("GET", "/files", headers=headers)
        try:
            return _FILE_LIST.validate_python(self._json(response) or [])
        except ValidationError as e:
            raise ResponseShapeError("Unexpected file list from backend") from e

    async def upload(self, staged: StagedFile, headers: Headers) -> None:
        files = {"file": (staged.filename, staged.content, staged.content_type)}
        await self._send("POST", "/upload", headers=headers, files=files)

    async def get_file_url(self, file_id: str, headers: Headers) -> DownloadDescriptor:
        """Fetch the download descriptor for a file.

        The descriptor's ``url`` is None when the backend omitted it; deciding
        whether that is an error is left to the caller.
        """
        response = await self._send("GET", f"/files/{file_id}", headers=headers)
        body = self._json(response)
        if not isinstance(body, dict):
            return DownloadDescriptor()
        try:
            return DownloadDescriptor.model_validate(body)
        except ValidationError:
            return DownloadDescriptor()

    async def delete_file(self, file_id: str, headers: Headers) -> None:
        await self._send("DELETE", f"/files/{file_id}", headers=headers)

    async def run_stage(self, file_id: str, stage: PipelineStage, headers: Headers) -> None:
        await self._send("POST", f"/{stage.value}/{file_id}", headers=headers, json={})

    async def ask(self, question: str, file_id: str, headers: Headers) -> str:
        """Ask a question about one file.

        Returns:
            The answer text, empty when the backend returned none.
        """
        body = AskRequest(question=question, file_id=file_id)
        response = await self._send(
            "POST", "/ask-docs", headers=headers, json=body.model_dump(by_alias=True)
        )
        payload = self._json(response)
        if not isinstance(payload, dict):
            return ""
        try:
            return AskResponse.model_validate(payload).answer
        except ValidationError as e:
            raise ResponseShapeError("Unexpected answer from backend") from e
