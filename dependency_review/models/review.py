"""Review result Pydantic models."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from dependency_review.models.change import DependencyChange


class LicenseIssues(BaseModel):
    """License-flagged changes, partitioned into disjoint categories."""

    model_config = {"extra": "forbid"}

    forbidden: list[DependencyChange] = Field(
        default_factory=list,
        description="Changes whose license violates the allow/deny policy",
    )
    unresolved: list[DependencyChange] = Field(
        default_factory=list,
        description="Changes whose license is not a valid SPDX expression",
    )
    unlicensed: list[DependencyChange] = Field(
        default_factory=list,
        description="Changes with no license information",
    )

    @property
    def count(self) -> int:
        """Total number of license-flagged changes."""
        return len(self.forbidden) + len(self.unresolved) + len(self.unlicensed)


class ReviewSummary(BaseModel):
    """Aggregate counts for a review."""

    model_config = {"extra": "forbid"}

    total_changes: int = 0
    added: int = 0
    removed: int = 0
    vulnerabilities: int = 0
    critical_vulns: int = 0
    high_vulns: int = 0
    moderate_vulns: int = 0
    low_vulns: int = 0


class Scorecard(BaseModel):
    """OpenSSF Scorecard result for a repository.

    Only ``score`` is required; the remaining payload is kept as returned.
    """

    model_config = {"extra": "allow"}

    score: float = Field(description="Aggregate score between 0 and 10")
    date: Optional[str] = None
    repo: Optional[dict[str, Any]] = None
    checks: list[dict[str, Any]] = Field(default_factory=list)


class ScorecardEntry(BaseModel):
    """A dependency change paired with its scorecard, if one was found."""

    model_config = {"extra": "forbid"}

    change: DependencyChange
    scorecard: Optional[Scorecard] = None


class ScorecardData(BaseModel):
    """Scorecard enrichment for a set of dependency changes."""

    model_config = {"extra": "forbid"}

    dependencies: list[ScorecardEntry] = Field(default_factory=list)

    def below_level(self, level: float) -> list[ScorecardEntry]:
        """Return entries with a known score strictly below ``level``."""
        return [
            entry
            for entry in self.dependencies
            if entry.scorecard is not None and entry.scorecard.score < level
        ]


class ReviewResult(BaseModel):
    """Verdict of a dependency review."""

    model_config = {"extra": "forbid"}

    vulnerable_changes: list[DependencyChange] = Field(default_factory=list)
    invalid_license_changes: LicenseIssues = Field(default_factory=LicenseIssues)
    denied_changes: list[DependencyChange] = Field(default_factory=list)
    scorecard: Optional[ScorecardData] = None
    has_issues: bool = False
    summary: ReviewSummary = Field(default_factory=ReviewSummary)

    @classmethod
    def empty(cls) -> ReviewResult:
        """Create the verdict for a comparison without dependency changes."""
        return cls()
