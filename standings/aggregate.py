"""Orchestrator: read every student result, rank it and write the ranks back."""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

from standings.models import MalformedRecord
from standings.ranking.compute import compute_ranks
from standings.stores.base import ResultStore

logger = logging.getLogger(__name__)


class AggregationFailure(Exception):
    """The rank aggregation run failed as a whole."""
    pass


class SourceUnavailable(AggregationFailure):
    """The result store could not be read. Nothing was written."""
    pass


@dataclass(frozen=True)
class PartialWriteFailure:
    """The computed rank of one record could not be written."""
    record_id: str
    roll_no: str
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.record_id, "rollNo": self.roll_no, "error": self.error}


@dataclass
class AggregationReport:
    """Outcome of one rank aggregation run.

    Attributes:
        records_updated: Records whose rank was written successfully
        records_attempted: Records whose rank write was attempted
        duration_ms: Wall time of the whole run
        malformed: Records left unranked (undecodable, or without semesters)
        failures: Records whose rank write failed
        last_updated: When the run finished (UTC)
    """
    records_updated: int
    records_attempted: int
    duration_ms: int
    malformed: list[MalformedRecord] = field(default_factory=list)
    failures: list[PartialWriteFailure] = field(default_factory=list)
    last_updated: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def success(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "recordsUpdated": self.records_updated,
            "recordsAttempted": self.records_attempted,
            "durationMs": self.duration_ms,
            "lastUpdated": self.last_updated.isoformat(),
            "malformed": [m.to_dict() for m in self.malformed],
            "failed": [f.to_dict() for f in self.failures],
        }


def recompute_ranks(
    store: ResultStore,
    clock: Callable[[], float] = time.monotonic,
) -> AggregationReport:
    """Recompute and persist the ranks of every student result in a store.

    Safe to re-run: every rank is replaced, and the same data always yields
    the same ranks. Writes are issued per record with no cross-record
    transaction, so readers may see a mix of old and new ranks while this
    runs. Two runs on the same store must not overlap; callers serialize.

    Args:
        store: Store to read results from and write ranks to
        clock: Monotonic clock in seconds, used to time the run

    Returns:
        AggregationReport with write counts, malformed records and failures

    Raises:
        SourceUnavailable: If the store could not be read
    """
    start = clock()

    try:
        records, undecodable = store.load()
    except Exception as e:
        logger.error("Could not read results: %s", e)
        raise SourceUnavailable(f"Failed to read results: {e}") from e

    computation = compute_ranks(records)
    malformed = undecodable + computation.malformed
    for bad in malformed:
        logger.warning("Skipping %s (%s): %s", bad.roll_no, bad.record_id, bad.reason)

    updated = 0
    failures: list[PartialWriteFailure] = []
    for assignment in computation.assignments:
        try:
            store.update_rank(assignment.record_id, assignment.rank)
        except Exception as e:
            # One bad write must not stop the rest
            logger.error("Failed to write rank of %s: %s", assignment.roll_no, e)
            failures.append(PartialWriteFailure(
                record_id=assignment.record_id,
                roll_no=assignment.roll_no,
                error=str(e),
            ))
        else:
            updated += 1

    duration_ms = int((clock() - start) * 1000)
    logger.info(
        "Ranks assigned: %d updated, %d failed, %d malformed in %d ms",
        updated, len(failures), len(malformed), duration_ms,
    )

    return AggregationReport(
        records_updated=updated,
        records_attempted=len(computation.assignments),
        duration_ms=duration_ms,
        malformed=malformed,
        failures=failures,
    )
