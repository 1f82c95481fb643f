"""Explicitly constructed workspace holding every flowdesk service."""

from __future__ import annotations

import logging
from typing import Any

from .config import Settings
from .errors import RemoteError
from .repositories import (
    HttpBackendClient,
    HttpTaskRepository,
    HttpTimeEntryRepository,
    InMemoryTaskRepository,
    InMemoryTimeEntryRepository,
    JsonFileStore,
    KeyValueStoreProtocol,
    TaskRepositoryProtocol,
    TimeEntryRepositoryProtocol,
)
from .services import (
    BoardService,
    ConfigService,
    DragDropService,
    NotificationService,
    ReportService,
    TaskService,
    TimeEntryService,
    TimerService,
    TimeTrackingService,
)
from .utils.datetime import Clock, now_utc

logger = logging.getLogger(__name__)


class WorkspaceContext:
    """
    Builds and owns the board, timer and recording services.

    Call init() before use and dispose() when the UI goes away, or use
    the context as ``async with WorkspaceContext(settings) as ctx``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        task_repository: TaskRepositoryProtocol | None = None,
        time_entry_repository: TimeEntryRepositoryProtocol | None = None,
        store: KeyValueStoreProtocol | None = None,
        clock: Clock = now_utc,
    ) -> None:
        self.settings = settings or Settings()
        self._http_client: HttpBackendClient | None = None
        self._init_services(task_repository, time_entry_repository, store, clock)

    def _init_services(
        self,
        task_repository: TaskRepositoryProtocol | None,
        time_entry_repository: TimeEntryRepositoryProtocol | None,
        store: KeyValueStoreProtocol | None,
        clock: Clock,
    ) -> None:
        """Initialize collaborators and services."""
        settings = self.settings
        self.config_service = ConfigService(settings.project_root)

        if settings.api_base_url and (task_repository is None or time_entry_repository is None):
            self._http_client = HttpBackendClient(
                settings.api_base_url, settings.api_token, settings.api_timeout
            )
        if task_repository is None:
            task_repository = (
                HttpTaskRepository(self._http_client)
                if self._http_client
                else InMemoryTaskRepository()
            )
        if time_entry_repository is None:
            time_entry_repository = (
                HttpTimeEntryRepository(self._http_client)
                if self._http_client
                else InMemoryTimeEntryRepository()
            )

        self.task_repository = task_repository
        self.time_entry_repository = time_entry_repository
        self.store = store if store is not None else JsonFileStore(settings.state_path)

        self.notifications = NotificationService()
        self.board = BoardService(task_repository, self.config_service)
        self.timers = TimerService(self.store, clock, settings.tick_interval)
        self.recorder = TimeEntryService(time_entry_repository, self.notifications, self.store)
        self.tracking = TimeTrackingService(
            self.timers, self.recorder, self.board, task_repository, self.notifications
        )
        self.drag_drop = DragDropService(
            self.board, task_repository, self.notifications, self.config_service
        )
        self.tasks = TaskService(
            task_repository, self.board, self.notifications, self.config_service, self.tracking
        )
        self.reports = ReportService(time_entry_repository, self.config_service)

    async def init(self, project_id: int | None = None, load_board: bool = True) -> None:
        """Load config, restore timers and unsent entries, and fetch the board."""
        config = self.config_service.get_config()
        if self.config_service.has_config_error:
            self.notifications.warning(f"Using default board: {self.config_service.config_error}")
        logger.info("Workspace init: %d columns", len(config.board.columns))

        await self.timers.init()
        self.recorder.restore()

        if load_board:
            try:
                await self.board.load(project_id)
            except RemoteError as e:
                logger.error("Initial board load failed: %s", e)
                self.notifications.error("Failed to load tasks. Please try again.")

    async def dispose(self) -> None:
        """Stop ticking and release network resources."""
        await self.timers.dispose()
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
        logger.info("Workspace disposed")

    async def __aenter__(self) -> WorkspaceContext:
        await self.init()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.dispose()
