"""Record and poll stores the engines read from and write to."""

from .base import PollStore, ResultStore, StoreError, VersionConflict
from .memory import InMemoryPollStore, InMemoryResultStore

__all__ = [
    "InMemoryPollStore",
    "InMemoryResultStore",
    "PollStore",
    "ResultStore",
    "StoreError",
    "VersionConflict",
]
