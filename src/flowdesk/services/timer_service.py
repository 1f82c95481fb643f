"""Service tracking active per-task timers."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from collections.abc import Callable

from pydantic import ValidationError

from ..errors import AlreadyActiveError, NotActiveError, PersistenceError
from ..models import StoppedTimer, TimerState
from ..repositories import KeyValueStoreProtocol
from ..utils.datetime import Clock, floor_seconds, now_utc

logger = logging.getLogger(__name__)

ACTIVE_TIMERS_KEY = "flowdesk.active_timers"

TickListener = Callable[[dict[int, int]], None]


class TimerService:
    """
    Owns the set of running timers and the interval that ticks them.

    The key-value store holds a mirror of the active set so timers survive a
    restart; it is read once by restore() and only written afterwards.
    Store failures are logged and never interrupt a timer operation.
    """

    def __init__(
        self,
        store: KeyValueStoreProtocol,
        clock: Clock = now_utc,
        tick_interval: float = 1.0,
    ) -> None:
        self._store = store
        self._clock = clock
        self.tick_interval = tick_interval
        self._timers: dict[int, TimerState] = {}
        self._listeners: list[TickListener] = []
        self._ticker: asyncio.Task[None] | None = None
        self._disposed = False

    # --- Queries ---

    def is_active(self, task_id: int) -> bool:
        return task_id in self._timers

    def get(self, task_id: int) -> TimerState | None:
        """Copy of the timer for a task, or None."""
        timer = self._timers.get(task_id)
        return timer.model_copy() if timer else None

    def active_timers(self) -> list[TimerState]:
        """Copies of all running timers in start order."""
        return [t.model_copy() for t in self._timers.values()]

    @property
    def is_ticking(self) -> bool:
        return self._ticker is not None and not self._ticker.done()

    # --- Timer operations ---

    def start(self, task_id: int) -> TimerState:
        """Start timing a task.

        Raises:
            AlreadyActiveError: a timer is already running for task_id
        """
        if task_id in self._timers:
            raise AlreadyActiveError(task_id)

        timer = TimerState(task_id=task_id, start_time=self._clock())
        self._timers[task_id] = timer
        self._persist()
        self._arm()
        logger.info("Timer started: task %d at %s", task_id, timer.start_time.isoformat())
        return timer.model_copy()

    def stop(self, task_id: int) -> StoppedTimer:
        """Stop timing a task and return the finished span.

        The timer leaves the active set before anything else happens, so a
        second stop for the same task fails instead of recording twice.

        Raises:
            NotActiveError: no timer is running for task_id
        """
        timer = self._timers.pop(task_id, None)
        if timer is None:
            raise NotActiveError(task_id)

        # A clock set backwards yields an empty span, never an inverted one
        end_time = max(self._clock(), timer.start_time)
        duration = floor_seconds(timer.start_time, end_time)
        self._persist()
        if not self._timers:
            self._cancel_ticker()

        logger.info("Timer stopped: task %d after %ds", task_id, duration)
        return StoppedTimer(
            task_id=task_id,
            start_time=timer.start_time,
            end_time=end_time,
            duration=duration,
        )

    def tick(self) -> dict[int, int]:
        """Recompute every running timer against one clock reading.

        Returns the {task_id: elapsed seconds} snapshot delivered to listeners.
        """
        now = self._clock()
        snapshot = {task_id: timer.recompute(now) for task_id, timer in self._timers.items()}
        for listener in list(self._listeners):
            try:
                listener(dict(snapshot))
            except Exception:
                logger.exception("Tick listener %r failed", listener)
        return snapshot

    def subscribe(self, listener: TickListener) -> None:
        """Register a callback receiving the snapshot of each tick."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: TickListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # --- Lifecycle ---

    def restore(self) -> list[int]:
        """Reload active timers persisted by a previous session.

        Elapsed time is recomputed from start_time; the stored value is
        ignored. Unreadable records are skipped. Timers already running in
        memory are kept as they are.

        Returns:
            IDs of the tasks whose timers were restored.
        """
        records = self._load_records()
        now = self._clock()
        restored: list[int] = []

        for key, record in records.items():
            try:
                timer = TimerState.model_validate(record)
            except ValidationError as e:
                logger.warning("Skipping corrupt timer record %r: %s", key, e)
                continue
            if not timer.is_active or timer.task_id in self._timers:
                continue
            timer.recompute(now)
            self._timers[timer.task_id] = timer
            restored.append(timer.task_id)

        if restored:
            logger.info("Restored %d active timer(s): %s", len(restored), restored)
            self._arm()
        return restored

    async def init(self) -> list[int]:
        """Restore persisted timers and start ticking if any are running."""
        self._disposed = False
        return self.restore()

    async def dispose(self) -> None:
        """Stop the tick loop. Running timers stay persisted."""
        self._disposed = True
        ticker = self._ticker
        self._cancel_ticker()
        if ticker is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await ticker

    # --- Internals ---

    def _arm(self) -> None:
        """Start the tick loop unless one is already running."""
        if self._disposed or not self._timers or self.is_ticking:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; ticking starts on next init()")
            return
        self._ticker = loop.create_task(self._run_ticker(), name="flowdesk-timer-tick")

    def _cancel_ticker(self) -> None:
        if self._ticker is not None and not self._ticker.done():
            self._ticker.cancel()
        self._ticker = None

    async def _run_ticker(self) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            if not self._timers:
                break
            self.tick()

    def _persist(self) -> None:
        payload = {
            str(task_id): timer.model_dump(mode="json")
            for task_id, timer in self._timers.items()
        }
        try:
            self._store.set(ACTIVE_TIMERS_KEY, json.dumps(payload))
        except PersistenceError as e:
            logger.warning("Could not persist active timers: %s", e)

    def _load_records(self) -> dict[str, object]:
        try:
            raw = self._store.get(ACTIVE_TIMERS_KEY)
        except PersistenceError as e:
            logger.warning("Could not read persisted timers: %s", e)
            return {}
        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("Discarding unreadable timer snapshot: %s", e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Discarding timer snapshot of type %s", type(data).__name__)
            return {}
        return data
