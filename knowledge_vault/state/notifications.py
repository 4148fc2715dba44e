"""Single-slot toast and busy indicator.

Last write wins for both slots: a new toast replaces the visible one and
restarts its dismissal timer, a new busy description replaces the current one.
"""

import asyncio
import logging
from collections.abc import Callable

from knowledge_vault.models import Notification, NotificationKind, OperationState

logger = logging.getLogger(__name__)

TOAST_SECONDS = 2.5

NotificationListener = Callable[[Notification], None]


class NotificationCenter:
    """Owns the toast slot and the busy slot.

    Both slots are mutated in place so UI bindings keep pointing at live objects.
    """

    def __init__(self, toast_seconds: float = TOAST_SECONDS) -> None:
        self.notification = Notification()
        self.operation = OperationState()
        self._toast_seconds = toast_seconds
        self._timer: asyncio.TimerHandle | None = None
        self._listeners: list[NotificationListener] = []

    def subscribe(self, listener: NotificationListener) -> None:
        """Call ``listener`` with the slot every time a toast is shown."""
        self._listeners.append(listener)

    def notify(
        self,
        message: str,
        kind: NotificationKind | str = NotificationKind.SUCCESS,
    ) -> None:
        """Show a toast, replacing any visible one, and restart the dismiss timer."""
        kind = NotificationKind(kind)
        self.notification.visible = True
        self.notification.kind = kind
        self.notification.message = message

        if kind is NotificationKind.ERROR:
            logger.info(f"Notify (error): {message}")
        else:
            logger.debug(f"Notify: {message}")

        self._cancel_timer()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop: the toast stays until dismissed explicitly
            logger.debug("No running loop, toast will not auto-dismiss")
        else:
            self._timer = loop.call_later(self._toast_seconds, self.dismiss)

        for listener in self._listeners:
            listener(self.notification)

    def error(self, message: str) -> None:
        self.notify(message, NotificationKind.ERROR)

    def dismiss(self) -> None:
        self._cancel_timer()
        self.notification.visible = False
        self.notification.message = ""
        self.notification.kind = NotificationKind.SUCCESS

    def begin(self, description: str) -> None:
        """Enter busy state, replacing any description already shown."""
        self.operation.busy = True
        self.operation.description = description

    def end(self) -> None:
        self.operation.busy = False
        self.operation.description = None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
