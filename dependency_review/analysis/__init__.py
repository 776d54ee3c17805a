"""Policy analysis for dependency-review."""
from dependency_review.analysis.denial import filter_denied_changes, is_denied
from dependency_review.analysis.licenses import (
    filter_invalid_licenses,
    is_excluded_from_license_check,
)
from dependency_review.analysis.summary import determine_has_issues, generate_summary
from dependency_review.analysis.vulnerabilities import (
    failing_vulnerabilities,
    filter_vulnerable_changes,
    is_in_checked_scope,
)

__all__ = [
    "determine_has_issues",
    "failing_vulnerabilities",
    "filter_denied_changes",
    "filter_invalid_licenses",
    "filter_vulnerable_changes",
    "generate_summary",
    "is_denied",
    "is_excluded_from_license_check",
    "is_in_checked_scope",
]
