"""Report of running timers and unsent time entries."""

import logging

from ..config import Settings
from ..repositories import InMemoryTimeEntryRepository, JsonFileStore
from ..services import NotificationService, TimeEntryService, TimerService
from ..utils import format_duration, format_elapsed
from .output import header, info, success

logger = logging.getLogger(__name__)


def run_timers(settings: Settings) -> int:
    """Print active timers from the local state file."""
    store = JsonFileStore(settings.state_path)

    timers = TimerService(store, tick_interval=settings.tick_interval)
    timers.restore()
    active = timers.active_timers()

    # Only reads the buffer; nothing is submitted from the CLI
    recorder = TimeEntryService(InMemoryTimeEntryRepository(), NotificationService(), store)
    recorder.restore()
    pending = recorder.pending

    header(f"Active timers ({len(active)})")
    if not active:
        info("No timers running")
    for timer in active:
        info(
            f"task {timer.task_id}: {format_elapsed(timer.elapsed_time)} "
            f"(since {timer.start_time:%Y-%m-%d %H:%M:%S %Z})"
        )

    if pending:
        total = sum(draft.duration for draft in pending)
        info(f"{len(pending)} unsent time entries ({format_duration(total)})")
    else:
        success("All time entries saved")
    return 0
