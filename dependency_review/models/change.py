"""Dependency change Pydantic models.

These mirror the payload of the GitHub dependency-graph compare endpoint.
Instances are frozen: the review engine only reads them.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class ChangeType(str, Enum):
    """Whether a dependency was added or removed between two revisions."""

    ADDED = "added"
    REMOVED = "removed"


class Scope(str, Enum):
    """Dependency scope classification."""

    UNKNOWN = "unknown"
    RUNTIME = "runtime"
    DEVELOPMENT = "development"


class Severity(str, Enum):
    """Advisory severity levels, ordered low < moderate < high < critical."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Ordinal position of this severity (low is 0)."""
        return _SEVERITY_RANKS[self]


_SEVERITY_RANKS = {
    Severity.LOW: 0,
    Severity.MODERATE: 1,
    Severity.HIGH: 2,
    Severity.CRITICAL: 3,
}


class Vulnerability(BaseModel):
    """A known security advisory attached to a dependency change."""

    model_config = {"frozen": True, "extra": "ignore"}

    severity: Severity = Field(description="Advisory severity")
    advisory_ghsa_id: str = Field(description="Stable advisory identifier")
    advisory_summary: str = Field(default="", description="Advisory summary")
    advisory_url: str = Field(default="", description="Advisory reference URL")


class DependencyChange(BaseModel):
    """One entry in the dependency diff between two revisions."""

    model_config = {"frozen": True, "extra": "ignore"}

    change_type: ChangeType = Field(description="Whether the dependency was added or removed")
    manifest: str = Field(default="", description="Manifest file the change came from")
    ecosystem: str = Field(description="Package ecosystem (npm, pip, actions, ...)")
    name: str = Field(description="Package name")
    version: str = Field(default="", description="Package version")
    package_url: Optional[str] = Field(
        default=None, description="Canonical package URL (purl)"
    )
    license: Optional[str] = Field(
        default=None, description="SPDX license expression, None if unknown"
    )
    source_repository_url: Optional[str] = Field(
        default=None, description="Declared source repository URL"
    )
    scope: Optional[Scope] = Field(default=None, description="Dependency scope")
    vulnerabilities: list[Vulnerability] = Field(
        default_factory=list,
        description="Known vulnerabilities for this package version",
    )

    @field_validator("vulnerabilities", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_added(self) -> bool:
        """Check if this change adds a dependency."""
        return self.change_type == ChangeType.ADDED

    @property
    def display_name(self) -> str:
        """Package name and version, as ``name@version``."""
        return f"{self.name}@{self.version}" if self.version else self.name

    @property
    def package_url_without_version(self) -> str:
        """Package URL with the ``@version`` suffix removed."""
        return (self.package_url or "").split("@", 1)[0]


class ComparisonResponse(BaseModel):
    """Dependency diff between two revisions, as returned by the API."""

    model_config = {"frozen": True, "extra": "forbid"}

    changes: list[DependencyChange] = Field(default_factory=list)
    snapshot_warnings: str = Field(
        default="", description="Free-text warnings about the dependency snapshots"
    )

    @property
    def added_changes(self) -> list[DependencyChange]:
        """Changes that add a dependency."""
        return [change for change in self.changes if change.is_added]
