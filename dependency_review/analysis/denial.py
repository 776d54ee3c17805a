"""Package and group denial rules."""
from __future__ import annotations

from dependency_review.models.change import DependencyChange
from dependency_review.models.config import ReviewConfig


def is_denied(change: DependencyChange, config: ReviewConfig) -> bool:
    """Check a change against the denied packages and groups.

    Args:
        change: Dependency change to check.
        config: Review policy.

    Returns:
        True if the package URL contains a denied package or starts with a
        denied group.
    """
    package_url = change.package_url or ""
    if any(denied in package_url for denied in config.deny_packages):
        return True
    return any(package_url.startswith(group) for group in config.deny_groups)


def filter_denied_changes(
    changes: list[DependencyChange],
    config: ReviewConfig,
) -> list[DependencyChange]:
    """Select added changes that match a denial rule.

    Returns an empty list without looking at the changes when no denial
    rules are configured.
    """
    if not config.deny_packages and not config.deny_groups:
        return []

    return [
        change for change in changes if change.is_added and is_denied(change, config)
    ]
