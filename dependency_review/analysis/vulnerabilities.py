"""Vulnerability filtering for added dependencies."""
from __future__ import annotations

from dependency_review.models.change import DependencyChange, Vulnerability
from dependency_review.models.config import ReviewConfig


def is_in_checked_scope(change: DependencyChange, config: ReviewConfig) -> bool:
    """Check if a change's scope is subject to vulnerability checking.

    Changes without a declared scope are always checked.
    """
    return change.scope is None or change.scope in config.fail_on_scopes


def failing_vulnerabilities(
    change: DependencyChange,
    config: ReviewConfig,
) -> list[Vulnerability]:
    """Return the vulnerabilities of a change that fail the policy.

    A vulnerability fails when its advisory is not allow-listed and its
    severity is at or above the configured threshold.
    """
    allowed_ghsas = set(config.allow_ghsas)
    threshold = config.fail_on_severity.rank
    return [
        vuln
        for vuln in change.vulnerabilities
        if vuln.advisory_ghsa_id not in allowed_ghsas
        and vuln.severity.rank >= threshold
    ]


def filter_vulnerable_changes(
    changes: list[DependencyChange],
    config: ReviewConfig,
) -> list[DependencyChange]:
    """Select added changes with at least one failing vulnerability.

    Args:
        changes: All dependency changes of the comparison.
        config: Review policy.

    Returns:
        Flagged changes, in input order. Removed dependencies are never
        flagged.
    """
    return [
        change
        for change in changes
        if change.is_added
        and is_in_checked_scope(change, config)
        and failing_vulnerabilities(change, config)
    ]
