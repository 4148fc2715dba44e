"""Session lifecycle: signup, login, logout and restore-on-start.

The token is the only thing that decides which view is shown. It is persisted
client-side, in the browser's own storage for the web UI or in a small JSON
file otherwise, so a restart resumes the session without a network call. An
expired restored token surfaces as an ordinary 401 on the first call.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, MutableMapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from knowledge_vault.client import BackendClient
from knowledge_vault.errors import StorageError
from knowledge_vault.models import AuthMode, Outcome, Session
from knowledge_vault.state.notifications import NotificationCenter

if TYPE_CHECKING:
    from knowledge_vault.orchestrator import RequestOrchestrator

logger = logging.getLogger(__name__)

LoginHook = Callable[[], Awaitable[object]]
LogoutHook = Callable[[], None]


class SessionStore:
    """Durable storage for the token and display name.

    The file holds a JSON object with the keys ``token`` and ``name``.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Session:
        """Read the persisted session.

        Returns:
            The stored session, or an empty one if the file is missing or unreadable.
        """
        if not self._path.exists():
            return Session()
        try:
            return Session.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable session file {self._path}: {e}")
            return Session()

    def save(self, session: Session) -> None:
        """Write the session.

        Raises:
            StorageError: If the file cannot be written.
        """
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(session.model_dump_json(), encoding="utf-8")
        except OSError as e:
            logger.error(f"Could not write session file {self._path}: {e}")
            raise StorageError("Could not save session") from e


class UserStorageSessionStore:
    """Session storage inside a per-user mapping such as NiceGUI's ``app.storage.user``.

    Each browser gets its own mapping, so visitors never see each other's token.
    """

    def __init__(self, storage: MutableMapping[str, Any], key: str = "vault_session") -> None:
        self._storage = storage
        self._key = key

    def load(self) -> Session:
        data = self._storage.get(self._key)
        if data is None:
            return Session()
        try:
            return Session.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Ignoring unreadable stored session: {e}")
            return Session()

    def save(self, session: Session) -> None:
        self._storage[self._key] = session.model_dump()


SessionBackend = SessionStore | UserStorageSessionStore


class SessionManager:
    """Owns the authentication token and display identity.

    Other components never write the session; they react to it through
    login hooks (run after a successful login) and logout hooks (run on every
    logout, explicit or forced by a 401).
    """

    def __init__(
        self,
        client: BackendClient,
        notifications: NotificationCenter,
        store: SessionBackend,
    ) -> None:
        self.session = Session()
        self.mode = AuthMode.LOGIN
        self._client = client
        self._notifications = notifications
        self._store = store
        self._orchestrator: RequestOrchestrator | None = None
        self._login_hooks: list[LoginHook] = []
        self._logout_hooks: list[LogoutHook] = []

    def bind(self, orchestrator: RequestOrchestrator) -> None:
        """Attach the orchestrator used for signup and login calls."""
        self._orchestrator = orchestrator

    @property
    def orchestrator(self) -> RequestOrchestrator:
        if self._orchestrator is None:
            raise RuntimeError("SessionManager used before an orchestrator was bound")
        return self._orchestrator

    @property
    def is_authenticated(self) -> bool:
        return bool(self.session.token)

    @property
    def display_name(self) -> str | None:
        return self.session.name

    def auth_headers(self) -> dict[str, str]:
        """Authorization header for the current token, empty when logged out."""
        if not self.session.token:
            return {}
        return {"Authorization": f"Bearer {self.session.token}"}

    def on_login(self, hook: LoginHook) -> None:
        self._login_hooks.append(hook)

    def on_logout(self, hook: LogoutHook) -> None:
        self._logout_hooks.append(hook)

    def set_mode(self, mode: AuthMode | str) -> None:
        self.mode = AuthMode(mode)

    def restore(self) -> bool:
        """Load a persisted session without contacting the backend.

        Returns:
            True if a token was restored.
        """
        stored = self._store.load()
        self.session.token = stored.token or None
        self.session.name = stored.name or None
        logger.info(f"Session restored (authenticated={self.is_authenticated})")
        return self.is_authenticated

    async def signup(self, name: str, email: str, password: str) -> Outcome:
        """Create an account; the user still has to log in afterwards."""

        def remember_name(_: object) -> None:
            self._commit(self.session.model_copy(update={"name": name or None}))
            self.mode = AuthMode.LOGIN

        return await self.orchestrator.run(
            lambda _headers: self._client.signup(name, email, password),
            description="Creating account...",
            success_message="Signup successful, please login",
            failure_message="Signup failed",
            on_success=remember_name,
            authenticated=False,
            key="signup",
        )

    async def login(self, email: str, password: str) -> Outcome:
        """Log in, persist the token, then run the login hooks."""

        def store_token(token: str) -> None:
            self._commit(self.session.model_copy(update={"token": token}))

        outcome = await self.orchestrator.run(
            lambda _headers: self._client.login(email, password),
            description="Logging in...",
            success_message="Logged in",
            failure_message="Login failed",
            on_success=store_token,
            authenticated=False,
            key="login",
        )
        if outcome.ok:
            logger.info("Logged in")
            for hook in self._login_hooks:
                await hook()
        return outcome

    def logout(self) -> None:
        """Drop the token everywhere and reset dependent state.

        The in-memory session always ends, even when storage cannot be updated.
        """
        self.session.token = None
        try:
            self._store.save(self.session)
        except StorageError as e:
            stored = False
            logger.error(f"Logged out but the stored token remains: {e.message}")
        else:
            stored = True
        for hook in self._logout_hooks:
            hook()
        logger.info("Logged out")
        if stored:
            self._notifications.notify("Logged out")
        else:
            self._notifications.error("Logged out, but the saved session could not be cleared")

    def _commit(self, session: Session) -> None:
        """Persist ``session`` and only then make it current.

        Raises:
            StorageError: If it could not be saved; the current session is unchanged.
        """
        self._store.save(session)
        self.session.token = session.token
        self.session.name = session.name
