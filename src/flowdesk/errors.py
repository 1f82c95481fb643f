"""Exceptions raised by flowdesk services and collaborators."""


class FlowdeskError(Exception):
    """Base exception for flowdesk errors."""

    pass


class TimerError(FlowdeskError):
    """A timer operation was used against the wrong timer state."""

    def __init__(self, task_id: int, message: str) -> None:
        super().__init__(message)
        self.task_id = task_id


class AlreadyActiveError(TimerError):
    """A timer is already running for the task."""

    def __init__(self, task_id: int) -> None:
        super().__init__(task_id, f"Timer already running for task {task_id}")


class NotActiveError(TimerError):
    """No timer is running for the task."""

    def __init__(self, task_id: int) -> None:
        super().__init__(task_id, f"No timer running for task {task_id}")


class RemoteError(FlowdeskError):
    """A remote collaborator failed (transport or server error)."""

    pass


class NotFoundError(RemoteError):
    """The remote entity no longer exists."""

    pass


class AuthError(RemoteError):
    """The backend rejected our credentials."""

    pass


class PersistenceError(FlowdeskError):
    """The local key-value store could not be read or written."""

    pass
