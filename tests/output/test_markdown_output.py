"""Tests for the Markdown formatter."""
from __future__ import annotations

from dependency_review.models.review import ReviewResult
from dependency_review.output.markdown import MarkdownFormatter


class TestMarkdownFormatter:
    """Tests for MarkdownFormatter."""

    def test_summary_table(self, flagged_result: ReviewResult) -> None:
        """Test the summary table of a failing review."""
        output = MarkdownFormatter().format_review(flagged_result)

        assert output.startswith("# Dependency Review\n")
        assert "| Total Changes | 6 |" in output
        assert "| Critical | 1 |" in output
        assert "| License Issues | 3 |" in output
        assert "| Denied Packages | 1 |" in output
        assert "| **Status** | **❌ ISSUES FOUND** |" in output

    def test_sections(self, flagged_result: ReviewResult) -> None:
        """Test that every flagged change appears in its section."""
        output = MarkdownFormatter().format_review(flagged_result)

        assert "## Vulnerabilities" in output
        assert (
            "[GHSA-xvch-5gv4-984h](https://github.com/advisories/GHSA-xvch-5gv4-984h)" in output
        )
        assert "## Forbidden Licenses" in output
        assert "| package-lock.json | gpl-lib@2.0.0 | GPL-3.0-only |" in output
        assert "## Unresolved Licenses" in output
        assert "## Unknown Licenses" in output
        assert "| package-lock.json | bare-lib@3.0.0 | *Unknown* |" in output
        assert "## Denied Packages" in output
        assert "`pkg:npm/banned-package@1.0.0`" in output

    def test_pipes_are_escaped(self, flagged_result: ReviewResult) -> None:
        """Test that table cells cannot break the table."""
        output = MarkdownFormatter().format_review(flagged_result)
        assert "Custom \\| Weird" in output

    def test_scorecard_table(self, flagged_result: ReviewResult) -> None:
        """Test the scorecard table with low, good and missing scores."""
        output = MarkdownFormatter(scorecard_warn_level=3).format_review(flagged_result)

        assert "## OpenSSF Scorecard" in output
        assert "| minimist@1.2.0 | 2.1/10 | ⚠️ |" in output
        assert "| gpl-lib@2.0.0 | 8.7/10 | ✅ |" in output
        assert "| banned-package@1.0.0 | *Unavailable* | |" in output

    def test_passing_review(self, passing_result: ReviewResult) -> None:
        """Test a passing review."""
        output = MarkdownFormatter().format_review(passing_result)

        assert "| **Status** | **✅ PASS** |" in output
        assert "## Vulnerabilities" not in output
        assert "## OpenSSF Scorecard" not in output

    def test_snapshot_warnings(self, passing_result: ReviewResult) -> None:
        """Test that snapshot warnings are quoted."""
        output = MarkdownFormatter().format_review(passing_result, "Snapshot is stale")

        assert "## Snapshot Warnings" in output
        assert "> Snapshot is stale" in output
