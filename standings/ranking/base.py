"""Abstract base class for rank partitions."""

from abc import ABC, abstractmethod
from collections.abc import Hashable

from standings.models import StudentResult


class Partition(ABC):
    """A way of grouping student results for ranking.

    Records sharing the same key are ranked against each other by the CGPI
    of their most recent semester. Partitions are registered via the
    @register_partition decorator in standings/ranking/__init__.py.
    """

    @property
    @abstractmethod
    def field(self) -> str:
        """Name of the Rank attribute this partition fills in."""
        pass

    @abstractmethod
    def key(self, record: StudentResult) -> Hashable:
        """Return the grouping key of a record within this partition."""
        pass
