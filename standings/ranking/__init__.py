"""Rank partitions for student results.

A partition splits the student body into groups whose members are ranked
against each other: the whole college, one batch, or one branch within a
batch. Each partition fills one field of ``Rank``.
"""

from .base import Partition

# Registered by partitions.py; ranking passes run in this order
_partitions: list[type[Partition]] = []


def register_partition(partition_class: type[Partition]) -> type[Partition]:
    """Add a partition to the set every result is ranked within."""
    _partitions.append(partition_class)
    return partition_class


def get_all_partitions() -> list[Partition]:
    """One instance of each registered partition, in ranking order."""
    return [partition_class() for partition_class in _partitions]
