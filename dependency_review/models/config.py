"""Configuration Pydantic models for dependency-review."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from dependency_review.models.change import Scope, Severity


class ReviewConfig(BaseModel):
    """Policy configuration for a dependency review.

    Configuration files use kebab-case keys (``fail-on-severity``); the
    Python field names are accepted as well. Validation enforces the
    cross-field rules, so a constructed instance is always a usable policy.
    """

    model_config = {
        "extra": "forbid",
        "frozen": True,
        "populate_by_name": True,
    }

    fail_on_severity: Severity = Field(
        default=Severity.LOW,
        alias="fail-on-severity",
        description="Minimum vulnerability severity that fails the review.",
    )
    fail_on_scopes: list[Scope] = Field(
        default_factory=lambda: [Scope.RUNTIME],
        alias="fail-on-scopes",
        description="Dependency scopes subject to vulnerability checking.",
    )
    allow_licenses: Optional[list[str]] = Field(
        default=None,
        alias="allow-licenses",
        description="Allowed SPDX license identifiers. "
        "Licenses not satisfied by this list are flagged.",
    )
    deny_licenses: Optional[list[str]] = Field(
        default=None,
        alias="deny-licenses",
        description="Denied SPDX license identifiers.",
    )
    allow_ghsas: list[str] = Field(
        default_factory=list,
        alias="allow-ghsas",
        description="Advisory IDs to ignore when checking vulnerabilities.",
    )
    deny_packages: list[str] = Field(
        default_factory=list,
        alias="deny-packages",
        description="Package URL substrings that are denied outright.",
    )
    deny_groups: list[str] = Field(
        default_factory=list,
        alias="deny-groups",
        description="Package URL prefixes (namespaces) that are denied outright.",
    )
    license_check_exclusions: list[str] = Field(
        default_factory=list,
        alias="license-check-exclusions",
        description="Package URLs or package URL prefixes skipped by license checks.",
    )
    license_check: bool = Field(default=True, alias="license-check")
    vulnerability_check: bool = Field(default=True, alias="vulnerability-check")
    warn_only: bool = Field(
        default=False,
        alias="warn-only",
        description="Report findings but never fail the review.",
    )
    show_openssf_scorecard: bool = Field(
        default=True,
        alias="show-openssf-scorecard",
        description="Look up OpenSSF Scorecard results for added dependencies.",
    )
    warn_on_openssf_scorecard_level: float = Field(
        default=3,
        ge=0,
        le=10,
        alias="warn-on-openssf-scorecard-level",
        description="Scores below this level are highlighted in reports.",
    )

    @model_validator(mode="after")
    def _check_policy(self) -> ReviewConfig:
        if self.allow_licenses and self.deny_licenses:
            raise ValueError("Cannot specify both allow-licenses and deny-licenses")
        if not self.license_check and not self.vulnerability_check:
            raise ValueError(
                "Cannot disable both license checking and vulnerability checking"
            )
        return self

    @property
    def has_allow_list(self) -> bool:
        """Check if a non-empty license allow list is configured."""
        return bool(self.allow_licenses)

    @property
    def has_deny_list(self) -> bool:
        """Check if a non-empty license deny list is configured."""
        return bool(self.deny_licenses)
