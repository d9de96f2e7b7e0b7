"""Abstract base classes for the stores behind the engines."""

from abc import ABC, abstractmethod

from standings.models import MalformedRecord, Poll, Rank, StudentResult, Vote


class StoreError(Exception):
    """A store operation failed."""
    pass


class VersionConflict(StoreError):
    """A compare-and-swap write found a different version than expected."""

    def __init__(self, poll_id: str, expected_version: int):
        super().__init__(
            f"Poll {poll_id} was modified concurrently "
            f"(expected version {expected_version})"
        )
        self.poll_id = poll_id
        self.expected_version = expected_version


class ResultStore(ABC):
    """Source of student results and sink for their ranks.

    The rank aggregation job reads every record once, then writes back only
    the ``rank`` field of each record, one record at a time.
    """

    @abstractmethod
    def find_all(self) -> list[StudentResult]:
        """Return every student result, in a stable order."""
        pass

    def load(self) -> tuple[list[StudentResult], list[MalformedRecord]]:
        """Return every decodable result, plus the stored records that are not.

        Stores that hold raw documents override this so that one bad
        document does not hide the others.

        Raises:
            StoreError: If the store itself could not be read
        """
        return self.find_all(), []

    @abstractmethod
    def update_rank(self, record_id: str, rank: Rank) -> None:
        """Replace the rank of a single record.

        Raises:
            StoreError: If the record could not be updated
        """
        pass


class PollStore(ABC):
    """Source and sink of polls. The unit of persistence is the full vote list."""

    @abstractmethod
    def find_by_id(self, poll_id: str) -> Poll | None:
        pass

    @abstractmethod
    def save_votes(self, poll_id: str, votes: list[Vote], expected_version: int) -> Poll:
        """Replace a poll's votes if its version still equals ``expected_version``.

        Returns:
            The poll as stored after the write, with its version incremented

        Raises:
            VersionConflict: If the poll changed since it was read
            StoreError: If the poll does not exist or the write failed
        """
        pass
