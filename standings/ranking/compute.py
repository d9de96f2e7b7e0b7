"""Pure rank computation over a collection of student results."""

from dataclasses import dataclass, field
from typing import Any

from standings.models import MalformedRecord, Rank, StudentResult
from standings.ranking import get_all_partitions
# Import partitions to register them
from standings.ranking import partitions  # noqa: F401


@dataclass(frozen=True)
class RankAssignment:
    """Ranks computed for one record."""
    record_id: str
    roll_no: str
    rank: Rank


@dataclass
class RankComputation:
    """Result of ranking a collection of records.

    Attributes:
        assignments: One entry per rankable record, in input order
        malformed: Records excluded from every partition
    """
    assignments: list[RankAssignment] = field(default_factory=list)
    malformed: list[MalformedRecord] = field(default_factory=list)

    def rank_of(self, record_id: str) -> Rank | None:
        for assignment in self.assignments:
            if assignment.record_id == record_id:
                return assignment.rank
        return None


def compute_ranks(records: list[StudentResult]) -> RankComputation:
    """Compute college, batch, branch and class ranks for every record.

    Within each partition, records are ordered by the CGPI of their latest
    semester, highest first. Ranks are 1-based positions in that order, so
    they are dense and unique per partition. Equal CGPIs keep the order in
    which the records were given: this relies on ``sorted`` being stable.

    Records without any semester are left out of every partition and
    reported in ``malformed``. The input records are not modified.
    """
    eligible: list[StudentResult] = []
    malformed: list[MalformedRecord] = []
    for record in records:
        if record.latest_semester is None:
            malformed.append(MalformedRecord(
                record_id=record.id,
                roll_no=record.roll_no,
                reason="record has no semesters",
            ))
        else:
            eligible.append(record)

    # One Rank per position in eligible; ids are not assumed unique
    ranks = [Rank() for _ in eligible]

    for partition in get_all_partitions():
        # Group by key; dicts keep insertion order so groups keep input order
        groups: dict[Any, list[int]] = {}
        for index, record in enumerate(eligible):
            groups.setdefault(partition.key(record), []).append(index)

        for group in groups.values():
            ordered = sorted(group, key=lambda i: eligible[i].latest_semester.cgpi, reverse=True)
            for position, index in enumerate(ordered, start=1):
                setattr(ranks[index], partition.field, position)

    assignments = [
        RankAssignment(record_id=record.id, roll_no=record.roll_no, rank=rank)
        for record, rank in zip(eligible, ranks)
    ]
    return RankComputation(assignments=assignments, malformed=malformed)
