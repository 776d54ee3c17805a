"""License policy checking for added dependencies."""
from __future__ import annotations

from dependency_review.analysis import spdx
from dependency_review.constants import NO_ASSERTION
from dependency_review.models.change import DependencyChange
from dependency_review.models.config import ReviewConfig
from dependency_review.models.review import LicenseIssues


def _matches_exclusion(package_url: str, exclusion: str) -> bool:
    if package_url == exclusion:
        return True
    prefix = exclusion if exclusion.endswith("/") else f"{exclusion}/"
    return package_url.startswith(prefix)


def is_excluded_from_license_check(
    change: DependencyChange,
    config: ReviewConfig,
) -> bool:
    """Check if a change is exempt from license checking.

    An exclusion matches when it equals the package URL, or names a path
    prefix of it. Both the full package URL and the package URL without
    its ``@version`` suffix are tested, so ``pkg:npm/left-pad`` excludes
    ``pkg:npm/left-pad@1.3.0`` and ``pkg:npm/`` excludes every npm package.

    Args:
        change: Dependency change to check.
        config: Review policy with license_check_exclusions.

    Returns:
        True if the change should be skipped by license checks.
    """
    if not config.license_check_exclusions:
        return False

    candidates = {change.package_url or "", change.package_url_without_version}
    return any(
        _matches_exclusion(candidate, exclusion)
        for exclusion in config.license_check_exclusions
        for candidate in candidates
        if candidate
    )


def filter_invalid_licenses(
    changes: list[DependencyChange],
    config: ReviewConfig,
) -> LicenseIssues:
    """Classify added changes by license problem.

    Each change lands in at most one category:

    - unlicensed: no license, or the ``NOASSERTION`` sentinel
    - unresolved: the license is not a valid SPDX expression and an allow
      or deny list is configured
    - forbidden: the license is not satisfied by the allow list, or is
      satisfied by a license in the deny list

    Args:
        changes: All dependency changes of the comparison.
        config: Review policy.

    Returns:
        LicenseIssues with the three categories, each in input order.
    """
    issues = LicenseIssues()
    allow_range = " OR ".join(config.allow_licenses or [])

    for change in changes:
        if not change.is_added:
            continue

        if is_excluded_from_license_check(change, config):
            continue

        if not change.license or change.license == NO_ASSERTION:
            issues.unlicensed.append(change)
            continue

        if not config.has_allow_list and not config.has_deny_list:
            continue

        if not spdx.is_valid(change.license):
            issues.unresolved.append(change)
        elif config.has_allow_list:
            if not spdx.satisfies(change.license, allow_range):
                issues.forbidden.append(change)
        elif spdx.satisfies_any(change.license, config.deny_licenses or []):
            issues.forbidden.append(change)

    return issues
