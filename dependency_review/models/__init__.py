"""Pydantic data models for dependency-review."""

from dependency_review.models.change import (
    ChangeType,
    ComparisonResponse,
    DependencyChange,
    Scope,
    Severity,
    Vulnerability,
)
from dependency_review.models.config import ReviewConfig
from dependency_review.models.review import (
    LicenseIssues,
    ReviewResult,
    ReviewSummary,
    Scorecard,
    ScorecardData,
    ScorecardEntry,
)

__all__ = [
    "ChangeType",
    "ComparisonResponse",
    "DependencyChange",
    "LicenseIssues",
    "ReviewConfig",
    "ReviewResult",
    "ReviewSummary",
    "Scope",
    "Scorecard",
    "ScorecardData",
    "ScorecardEntry",
    "Severity",
    "Vulnerability",
]
