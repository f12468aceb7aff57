"""Grouping helpers for compliance issues returned with a generated roster."""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Optional

from rosterview.domain.models import ComplianceIssue, Severity, SeverityBucket


@dataclass
class ComplianceSummary:
    """Compliance issues grouped into display buckets.

    Attributes:
        critical: Issues that must be fixed.
        major: Issues that should be reviewed (MAJOR and WARNING).
        minor: Low-priority issues (MINOR and INFO).
    """

    critical: list[ComplianceIssue] = field(default_factory=list)
    major: list[ComplianceIssue] = field(default_factory=list)
    minor: list[ComplianceIssue] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.critical) + len(self.major) + len(self.minor)

    @property
    def passed(self) -> bool:
        """True when nothing critical was reported."""
        return not self.critical

    def counts(self) -> dict[SeverityBucket, int]:
        return {
            SeverityBucket.CRITICAL: len(self.critical),
            SeverityBucket.MAJOR: len(self.major),
            SeverityBucket.MINOR: len(self.minor),
        }

    def bucket(self, bucket: SeverityBucket) -> list[ComplianceIssue]:
        return {
            SeverityBucket.CRITICAL: self.critical,
            SeverityBucket.MAJOR: self.major,
            SeverityBucket.MINOR: self.minor,
        }[bucket]


def summarize_issues(issues: Iterable[ComplianceIssue]) -> ComplianceSummary:
    """Group issues by severity bucket, preserving input order within each."""
    summary = ComplianceSummary()
    for issue in issues:
        summary.bucket(issue.severity.bucket).append(issue)
    return summary


def issues_by_employee(
    issues: Iterable[ComplianceIssue],
) -> dict[str, list[ComplianceIssue]]:
    """Index issues by employee ID; issues without an employee are skipped."""
    index: dict[str, list[ComplianceIssue]] = defaultdict(list)
    for issue in issues:
        if issue.employee_id:
            index[issue.employee_id].append(issue)
    return dict(index)


def worst_severity(issues: Iterable[ComplianceIssue]) -> Optional[Severity]:
    """Most severe severity among the issues, or None if there are none."""
    worst = None
    for issue in issues:
        if worst is None or issue.severity.rank > worst.rank:
            worst = issue.severity
    return worst
