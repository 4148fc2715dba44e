"""Request orchestration: the one place backend failure policy lives.

Every backend call goes through ``RequestOrchestrator.run``, which:

1. Enters busy state with a human description of the call.
2. Hands the call the authorization header for the current session.
3. Awaits it.
4. On success runs the caller's continuation and shows the success toast.
5. On failure picks the message to show from the failure kind. A 401 on an
   authenticated call logs the user out instead of showing a failure toast.
   A continuation that cannot persist its result fails the same way.
6. Always leaves busy state.

Calls are not serialized by default: two overlapping calls race for the busy
description and the toast, and the last one to finish wins. With
``serialize`` enabled, a call whose key is already in flight is rejected.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from knowledge_vault.errors import (
    AuthorizationError,
    BackendError,
    RequestTimeout,
    ResponseShapeError,
    StorageError,
    TransportError,
)
from knowledge_vault.models import FailureKind, Outcome
from knowledge_vault.state.notifications import NotificationCenter
from knowledge_vault.state.session import SessionManager

logger = logging.getLogger(__name__)

BackendCall = Callable[[dict[str, str]], Awaitable[Any]]
Continuation = Callable[[Any], None]


class RequestOrchestrator:
    """Wraps backend calls with busy state, failure translation and forced logout."""

    def __init__(
        self,
        session: SessionManager,
        notifications: NotificationCenter,
        serialize: bool = False,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            session: Source of auth headers and target of forced logout.
            notifications: Where busy state and toasts go.
            serialize: Reject calls whose key is already in flight.
        """
        self._session = session
        self._notifications = notifications
        self._serialize = serialize
        self._in_flight: set[str] = set()

    @property
    def in_flight(self) -> frozenset[str]:
        return frozenset(self._in_flight)

    async def run(
        self,
        call: BackendCall,
        *,
        description: str,
        success_message: str,
        failure_message: str,
        on_success: Continuation | None = None,
        notify_success: bool = True,
        authenticated: bool = True,
        key: str | None = None,
    ) -> Outcome:
        """Run one backend call under the orchestration protocol.

        Args:
            call: Receives the auth headers and performs the request.
            description: Busy text shown while the call is pending.
            success_message: Toast shown on success.
            failure_message: Toast shown when the backend gives no message.
            on_success: Continuation receiving the call's result. May raise
                        ResponseShapeError or StorageError to turn the success
                        into a local failure.
            notify_success: Set False to suppress the success toast.
            authenticated: Whether a 401 means the session is gone.
            key: Operation key for the optional single-flight guard.

        Returns:
            Outcome with the call's value on success or the failure kind.
        """
        if self._serialize and key is not None:
            if key in self._in_flight:
                logger.info(f"Rejected re-entrant operation: {key}")
                self._notifications.error(f"{description.rstrip('.')} already running")
                return Outcome.failed(FailureKind.BUSY)
            self._in_flight.add(key)

        self._notifications.begin(description)
        headers = self._session.auth_headers() if authenticated else {}
        try:
            value = await call(headers)
            if on_success is not None:
                on_success(value)
        except AuthorizationError as e:
            if authenticated:
                logger.warning(f"{description} rejected as unauthorized, ending session")
                self._session.logout()
                return Outcome.failed(FailureKind.AUTHORIZATION)
            logger.warning(f"{description} unauthorized: {e}")
            self._notifications.error(e.message or failure_message)
            return Outcome.failed(FailureKind.AUTHORIZATION)
        except ResponseShapeError as e:
            logger.warning(f"{description} returned an unexpected response: {e.message}")
            self._notifications.error(e.message)
            return Outcome.failed(FailureKind.RESPONSE_SHAPE)
        except StorageError as e:
            logger.error(f"{description} could not persist its result: {e.message}")
            self._notifications.error(e.message)
            return Outcome.failed(FailureKind.STORAGE)
        except BackendError as e:
            logger.warning(f"{description} failed: {e}")
            self._notifications.error(e.message or failure_message)
            return Outcome.failed(FailureKind.BACKEND)
        except RequestTimeout as e:
            logger.error(f"{description} timed out: {e}")
            self._notifications.error(f"{failure_message} (request timed out)")
            return Outcome.failed(FailureKind.TIMEOUT)
        except TransportError as e:
            logger.error(f"{description} failed: {e}")
            self._notifications.error(failure_message)
            return Outcome.failed(FailureKind.TRANSPORT)
        finally:
            self._notifications.end()
            if key is not None:
                self._in_flight.discard(key)

        if notify_success:
            self._notifications.notify(success_message)
        return Outcome.success(value)
