"""In-memory stores, for tests and for ranking JSON datasets offline."""

import copy
import threading
from dataclasses import replace

from standings.models import Poll, Rank, StudentResult, Vote
from standings.stores.base import PollStore, ResultStore, StoreError, VersionConflict


class InMemoryResultStore(ResultStore):
    """Result store over a list of records, kept in insertion order."""

    def __init__(self, records: list[StudentResult] | None = None):
        self._records: dict[str, StudentResult] = {}
        for record in records or []:
            if record.id in self._records:
                raise ValueError(f"Duplicate result id {record.id}")
            self._records[record.id] = record

    def find_all(self) -> list[StudentResult]:
        return [copy.deepcopy(r) for r in self._records.values()]

    def update_rank(self, record_id: str, rank: Rank) -> None:
        record = self._records.get(record_id)
        if record is None:
            raise StoreError(f"No result with id {record_id}")
        record.rank = replace(rank)

    def get(self, record_id: str) -> StudentResult | None:
        return self._records.get(record_id)

    def records(self) -> list[StudentResult]:
        return list(self._records.values())


class InMemoryPollStore(PollStore):
    """Poll store whose compare-and-swap is guarded by a lock."""

    def __init__(self, polls: list[Poll] | None = None):
        self._polls: dict[str, Poll] = {p.id: p for p in polls or []}
        self._lock = threading.Lock()

    def find_by_id(self, poll_id: str) -> Poll | None:
        with self._lock:
            poll = self._polls.get(poll_id)
            return copy.deepcopy(poll) if poll is not None else None

    def save_votes(self, poll_id: str, votes: list[Vote], expected_version: int) -> Poll:
        with self._lock:
            poll = self._polls.get(poll_id)
            if poll is None:
                raise StoreError(f"No poll with id {poll_id}")
            if poll.version != expected_version:
                raise VersionConflict(poll_id, expected_version)
            poll.votes = list(votes)
            poll.version += 1
            return copy.deepcopy(poll)
