"""Domain models for the weekly roster view."""

from rosterview.domain.compliance import (
    ComplianceSummary,
    issues_by_employee,
    summarize_issues,
)
from rosterview.domain.models import (
    Annotation,
    AvailabilityRecord,
    Category,
    ComplianceIssue,
    DayTimeline,
    Employee,
    LayoutConfig,
    RosterResult,
    Severity,
    SeverityBucket,
    Shift,
    TimelineCell,
)
from rosterview.domain.week import WeekDirection, WeekWindow

__all__ = [
    # Models
    "Annotation",
    "AvailabilityRecord",
    "Category",
    "ComplianceIssue",
    "DayTimeline",
    "Employee",
    "LayoutConfig",
    "RosterResult",
    "Severity",
    "SeverityBucket",
    "Shift",
    "TimelineCell",
    # Weeks
    "WeekDirection",
    "WeekWindow",
    # Compliance
    "ComplianceSummary",
    "issues_by_employee",
    "summarize_issues",
]
