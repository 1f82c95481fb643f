"""Service collecting user-facing notifications for the UI shell."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

from ..models import Notification, NotificationLevel

logger = logging.getLogger(__name__)

NotificationListener = Callable[[Notification], None]


class NotificationService:
    """Fan-out of success/error messages to whatever renders toasts."""

    def __init__(self, max_history: int = 100) -> None:
        self._history: deque[Notification] = deque(maxlen=max_history)
        self._listeners: list[NotificationListener] = []

    @property
    def history(self) -> list[Notification]:
        """Notifications emitted so far, oldest first."""
        return list(self._history)

    def subscribe(self, listener: NotificationListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: NotificationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def clear(self) -> None:
        self._history.clear()

    def notify(
        self, level: NotificationLevel, message: str, task_id: int | None = None
    ) -> Notification:
        """Record a notification and deliver it to every listener."""
        notification = Notification(level=level, message=message, task_id=task_id)
        self._history.append(notification)
        logger.debug("Notification [%s]: %s", level.value, message)

        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception:
                logger.exception("Notification listener %r failed", listener)
        return notification

    def success(self, message: str, task_id: int | None = None) -> Notification:
        return self.notify(NotificationLevel.SUCCESS, message, task_id)

    def info(self, message: str, task_id: int | None = None) -> Notification:
        return self.notify(NotificationLevel.INFO, message, task_id)

    def warning(self, message: str, task_id: int | None = None) -> Notification:
        return self.notify(NotificationLevel.WARNING, message, task_id)

    def error(self, message: str, task_id: int | None = None) -> Notification:
        return self.notify(NotificationLevel.ERROR, message, task_id)
