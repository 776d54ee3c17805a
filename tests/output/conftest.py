"""Shared fixtures for output formatter tests."""
from __future__ import annotations

from typing import Callable

import pytest

from dependency_review.models.change import DependencyChange
from dependency_review.models.review import (
    LicenseIssues,
    ReviewResult,
    ReviewSummary,
    Scorecard,
    ScorecardData,
    ScorecardEntry,
)


@pytest.fixture
def flagged_result(make_change: Callable[..., DependencyChange]) -> ReviewResult:
    """A failing review with a change in every category."""
    vulnerable = make_change(
        name="minimist",
        version="1.2.0",
        vulnerabilities=[
            {
                "severity": "critical",
                "advisory_ghsa_id": "GHSA-xvch-5gv4-984h",
                "advisory_summary": "Prototype Pollution in minimist",
                "advisory_url": "https://github.com/advisories/GHSA-xvch-5gv4-984h",
            }
        ],
    )
    forbidden = make_change(name="gpl-lib", version="2.0.0", license="GPL-3.0-only")
    unresolved = make_change(name="odd-lib", version="0.1.0", license="Custom | Weird")
    unlicensed = make_change(name="bare-lib", version="3.0.0", license=None)
    denied = make_change(
        name="banned-package", version="1.0.0", package_url="pkg:npm/banned-package@1.0.0"
    )
    return ReviewResult(
        vulnerable_changes=[vulnerable],
        invalid_license_changes=LicenseIssues(
            forbidden=[forbidden], unresolved=[unresolved], unlicensed=[unlicensed]
        ),
        denied_changes=[denied],
        scorecard=ScorecardData(
            dependencies=[
                ScorecardEntry(change=vulnerable, scorecard=Scorecard(score=2.1)),
                ScorecardEntry(change=forbidden, scorecard=Scorecard(score=8.7)),
                ScorecardEntry(change=denied, scorecard=None),
            ]
        ),
        has_issues=True,
        summary=ReviewSummary(
            total_changes=6, added=5, removed=1, vulnerabilities=1, critical_vulns=1
        ),
    )


@pytest.fixture
def passing_result() -> ReviewResult:
    """A passing review of two changes."""
    return ReviewResult(summary=ReviewSummary(total_changes=2, added=1, removed=1))
