"""Timeline layout engine for the weekly roster view."""

from rosterview.layout.availability import AvailabilityIndex, AvailabilityRow
from rosterview.layout.engine import (
    Diagnostic,
    DiagnosticType,
    ShiftGroup,
    ShiftPartition,
    TimelineLayout,
    TimelineLayoutEngine,
    partition_shifts,
)
from rosterview.layout.overlap import (
    ColumnAssignment,
    Interval,
    OverlapPartitioner,
    max_concurrency,
)

__all__ = [
    # Engine
    "TimelineLayoutEngine",
    "TimelineLayout",
    "Diagnostic",
    "DiagnosticType",
    "ShiftGroup",
    "ShiftPartition",
    "partition_shifts",
    # Overlap resolution
    "OverlapPartitioner",
    "Interval",
    "ColumnAssignment",
    "max_concurrency",
    # Availability
    "AvailabilityIndex",
    "AvailabilityRow",
]
