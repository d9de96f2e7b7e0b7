"""The four rank partitions: college, batch, branch and class."""

from standings.models import StudentResult
from standings.ranking import register_partition
from standings.ranking.base import Partition


@register_partition
class CollegePartition(Partition):
    """Every student in one group."""

    @property
    def field(self) -> str:
        return "college"

    def key(self, record: StudentResult) -> None:
        return None


@register_partition
class BatchPartition(Partition):
    """Students admitted in the same year."""

    @property
    def field(self) -> str:
        return "batch"

    def key(self, record: StudentResult) -> int:
        return record.batch


@register_partition
class BranchPartition(Partition):
    """Students of the same branch within a batch."""

    @property
    def field(self) -> str:
        return "branch"

    def key(self, record: StudentResult) -> tuple[int, str]:
        return (record.batch, record.branch)


@register_partition
class ClassPartition(Partition):
    """Students of the same class.

    A class is currently keyed exactly like a branch, so class rank always
    equals branch rank. Kept as-is until a narrower key (e.g. section) is
    available on the record.
    """

    @property
    def field(self) -> str:
        return "class_"

    def key(self, record: StudentResult) -> tuple[int, str]:
        return (record.batch, record.branch)
