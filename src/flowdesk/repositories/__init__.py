"""Repository layer: collaborators for tasks, time entries and local state."""

from .http import HttpBackendClient, HttpTaskRepository, HttpTimeEntryRepository
from .kvstore import JsonFileStore, MemoryStore
from .memory import InMemoryTaskRepository, InMemoryTimeEntryRepository
from .protocol import (
    KeyValueStoreProtocol,
    TaskRepositoryProtocol,
    TimeEntryRepositoryProtocol,
)

__all__ = [
    "HttpBackendClient",
    "HttpTaskRepository",
    "HttpTimeEntryRepository",
    "InMemoryTaskRepository",
    "InMemoryTimeEntryRepository",
    "JsonFileStore",
    "KeyValueStoreProtocol",
    "MemoryStore",
    "TaskRepositoryProtocol",
    "TimeEntryRepositoryProtocol",
]
