"""Column assignment for overlapping intervals.

Shifts that share a day and a station are drawn side by side when they
overlap in time. This module assigns every interval a column such that no
two intervals in one column overlap, using as few columns as possible.

Intervals are half-open: ``[start, end)``. Two intervals that merely touch
(``a.end == b.start``) do not overlap and may share a column.

The assignment is a greedy colouring of the interval graph. Intervals are
processed by start time; each takes the lowest-indexed column that is free
at its start, or opens a new column. For interval graphs this first-fit
order is optimal: the columns used by a cluster equal the largest number of
its intervals active at any single instant.

A cluster is a maximal run of intervals connected by overlap, directly or
transitively. All intervals of a cluster report the same column count, so a
renderer can split the lane evenly for that cluster and use the full width
elsewhere.
"""

from dataclasses import dataclass
from typing import Any, Hashable, Optional, Sequence


@dataclass(frozen=True)
class Interval:
    """A half-open time interval with an opaque payload key.

    Attributes:
        start: Inclusive start (any totally ordered value, e.g. datetime).
        end: Exclusive end; must be greater than ``start``.
        key: Caller payload identifier, returned unchanged.
    """

    start: Any
    end: Any
    key: Hashable = None

    def __post_init__(self):
        if not self.start < self.end:
            raise ValueError(
                f"Interval end must be after start (start={self.start}, end={self.end})"
            )

    def overlaps(self, other: "Interval") -> bool:
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class ColumnAssignment:
    """Column placement of one interval.

    Attributes:
        interval: The interval placed.
        column: 0-based column within its cluster.
        column_count: Columns used by the interval's cluster.
        cluster: 0-based cluster number, in start-time order.
    """

    interval: Interval
    column: int
    column_count: int
    cluster: int

    @property
    def key(self) -> Hashable:
        return self.interval.key


class OverlapPartitioner:
    """Assigns overlapping intervals to parallel columns.

    The partitioner is stateless; one instance may be shared freely.

    Example:
        >>> partitioner = OverlapPartitioner()
        >>> result = partitioner.partition([Interval(8, 12, "a"), Interval(10, 14, "b")])
        >>> [(r.key, r.column, r.column_count) for r in result]
        [('a', 0, 2), ('b', 1, 2)]
    """

    def partition(self, intervals: Sequence[Interval]) -> list[ColumnAssignment]:
        """Assign a column to every interval.

        Intervals with equal starts keep their input order, so the result is
        deterministic for a given input sequence.

        Args:
            intervals: Intervals to place, in caller order.

        Returns:
            One ColumnAssignment per interval, in the same order as the input.
        """
        order = sorted(range(len(intervals)), key=lambda i: (intervals[i].start, i))

        columns: dict[int, int] = {}
        clusters: dict[int, int] = {}
        cluster_sizes: list[int] = []

        column_ends: list[Any] = []
        cluster_end: Optional[Any] = None

        for i in order:
            interval = intervals[i]

            # Everything open so far has ended: start a new cluster
            if cluster_end is not None and interval.start >= cluster_end:
                cluster_sizes.append(len(column_ends))
                column_ends = []
                cluster_end = None

            column = self._first_free_column(column_ends, interval.start)
            if column == len(column_ends):
                column_ends.append(interval.end)
            else:
                column_ends[column] = interval.end

            columns[i] = column
            clusters[i] = len(cluster_sizes)
            if cluster_end is None or interval.end > cluster_end:
                cluster_end = interval.end

        if column_ends:
            cluster_sizes.append(len(column_ends))

        return [
            ColumnAssignment(
                interval=interval,
                column=columns[i],
                column_count=cluster_sizes[clusters[i]],
                cluster=clusters[i],
            )
            for i, interval in enumerate(intervals)
        ]

    @staticmethod
    def _first_free_column(column_ends: list[Any], start: Any) -> int:
        """Lowest column whose last interval ended at or before ``start``."""
        for column, end in enumerate(column_ends):
            if end <= start:
                return column
        return len(column_ends)


def max_concurrency(intervals: Sequence[Interval]) -> int:
    """Largest number of intervals active at any single instant.

    Ends are processed before starts at the same instant, matching the
    half-open overlap rule.
    """
    events = []
    for interval in intervals:
        events.append((interval.start, 1))
        events.append((interval.end, -1))
    events.sort(key=lambda e: (e[0], e[1]))

    active = 0
    peak = 0
    for _, delta in events:
        active += delta
        peak = max(peak, active)
    return peak
