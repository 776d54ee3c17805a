"""Issue determination and summary aggregation for a review."""
from __future__ import annotations

from collections import Counter

from dependency_review.models.change import DependencyChange, Severity
from dependency_review.models.config import ReviewConfig
from dependency_review.models.review import LicenseIssues, ReviewSummary


def determine_has_issues(
    vulnerable_changes: list[DependencyChange],
    license_issues: LicenseIssues,
    denied_changes: list[DependencyChange],
    config: ReviewConfig,
) -> bool:
    """Decide whether the flagged changes fail the review.

    Unlicensed dependencies are reported but never fail a review, and
    warn-only mode never fails.
    """
    if config.warn_only:
        return False

    return bool(
        vulnerable_changes
        or license_issues.forbidden
        or license_issues.unresolved
        or denied_changes
    )


def generate_summary(
    all_changes: list[DependencyChange],
    vulnerable_changes: list[DependencyChange],
) -> ReviewSummary:
    """Aggregate change and vulnerability counts.

    Args:
        all_changes: Every change of the comparison, added and removed.
        vulnerable_changes: Changes flagged by the vulnerability check.

    Returns:
        ReviewSummary. Every vulnerability of a flagged change is counted,
        including those below the severity threshold.
    """
    added = sum(1 for change in all_changes if change.is_added)
    severities = Counter(
        vuln.severity for change in vulnerable_changes for vuln in change.vulnerabilities
    )

    return ReviewSummary(
        total_changes=len(all_changes),
        added=added,
        removed=len(all_changes) - added,
        vulnerabilities=sum(severities.values()),
        critical_vulns=severities[Severity.CRITICAL],
        high_vulns=severities[Severity.HIGH],
        moderate_vulns=severities[Severity.MODERATE],
        low_vulns=severities[Severity.LOW],
    )
