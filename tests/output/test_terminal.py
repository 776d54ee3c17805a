"""Tests for the Rich terminal formatter."""
from __future__ import annotations

from io import StringIO

from rich.console import Console

from dependency_review.models.review import ReviewResult
from dependency_review.output.terminal import TerminalFormatter


def _render(result: ReviewResult, warnings: str = "", **kwargs: float) -> str:
    output = StringIO()
    console = Console(file=output, force_terminal=False, width=200)
    TerminalFormatter(console=console, **kwargs).format_review(result, warnings)
    return output.getvalue()


class TestTerminalFormatter:
    """Tests for TerminalFormatter."""

    def test_summary_panel(self, flagged_result: ReviewResult) -> None:
        """Test the summary panel of a failing review."""
        output = _render(flagged_result)

        assert "DEPENDENCY REVIEW" in output
        assert "Total Changes: 6" in output
        assert "License Issues: 3" in output
        assert "ISSUES FOUND" in output

    def test_flagged_changes(self, flagged_result: ReviewResult) -> None:
        """Test that every flagged change is shown."""
        output = _render(flagged_result)

        assert "Vulnerable Dependencies" in output
        assert "minimist@1.2.0" in output
        assert "GHSA-xvch-5gv4-984h" in output
        assert "Forbidden Licenses" in output
        assert "gpl-lib@2.0.0" in output
        assert "Unresolved Licenses" in output
        assert "Unknown Licenses" in output
        assert "bare-lib@3.0.0" in output
        assert "Denied Packages (1)" in output
        assert "pkg:npm/banned-package@1.0.0" in output

    def test_scorecard_table(self, flagged_result: ReviewResult) -> None:
        """Test the scorecard table."""
        output = _render(flagged_result)

        assert "OpenSSF Scorecard" in output
        assert "2.1/10" in output
        assert "unavailable" in output

    def test_snapshot_warnings(self, passing_result: ReviewResult) -> None:
        """Test that snapshot warnings are shown."""
        output = _render(passing_result, "Snapshot is stale")

        assert "Snapshot Warnings" in output
        assert "Snapshot is stale" in output
        assert "PASS" in output

    def test_no_changes(self) -> None:
        """Test the message for an empty comparison."""
        assert "No dependency changes found" in _render(ReviewResult.empty())
