"""Tests for the JSON formatter."""
from __future__ import annotations

import json

from dependency_review import __version__
from dependency_review.models.review import ReviewResult
from dependency_review.output.review_json import ReviewJsonFormatter


class TestReviewJsonFormatter:
    """Tests for ReviewJsonFormatter."""

    def test_valid_json(self, flagged_result: ReviewResult) -> None:
        """Test that the output parses as JSON."""
        data = json.loads(ReviewJsonFormatter().format_review(flagged_result))

        assert data["has_issues"] is True
        assert data["review_metadata"]["tool_version"] == __version__
        assert data["review_metadata"]["generated_at"].endswith("Z")

    def test_every_category_present(self, flagged_result: ReviewResult) -> None:
        """Test that flagged changes are kept in full."""
        data = json.loads(ReviewJsonFormatter().format_review(flagged_result))

        assert data["vulnerable_changes"][0]["name"] == "minimist"
        assert data["vulnerable_changes"][0]["vulnerabilities"][0]["severity"] == "critical"
        licenses = data["invalid_license_changes"]
        assert [c["name"] for c in licenses["forbidden"]] == ["gpl-lib"]
        assert [c["name"] for c in licenses["unresolved"]] == ["odd-lib"]
        assert [c["name"] for c in licenses["unlicensed"]] == ["bare-lib"]
        assert data["denied_changes"][0]["package_url"] == "pkg:npm/banned-package@1.0.0"
        assert data["summary"]["critical_vulns"] == 1

    def test_scorecard(self, flagged_result: ReviewResult) -> None:
        """Test that scorecard entries keep missing scores as null."""
        data = json.loads(ReviewJsonFormatter().format_review(flagged_result))
        entries = data["scorecard"]["dependencies"]

        assert entries[0]["scorecard"]["score"] == 2.1
        assert entries[2]["scorecard"] is None

    def test_snapshot_warnings(self, passing_result: ReviewResult) -> None:
        """Test that snapshot warnings are passed through."""
        data = json.loads(ReviewJsonFormatter().format_review(passing_result, "stale"))

        assert data["snapshot_warnings"] == "stale"
        assert data["scorecard"] is None
