"""Plain-text summary formatter for dependency review results."""

from typing import Callable

from dependency_review.models.change import DependencyChange
from dependency_review.models.review import ReviewResult

RULE = "═" * 50


class SummaryFormatter:
    """Format review results as a plain-text summary.

    Lists every flagged change under its category, followed by the snapshot
    warnings, scorecard scores and the overall status.
    """

    def __init__(self, scorecard_warn_level: float = 3) -> None:
        """Initialize the formatter.

        Args:
            scorecard_warn_level: Scorecard scores below this level are
                marked as low.
        """
        self._scorecard_warn_level = scorecard_warn_level

    def format_review(self, result: ReviewResult, snapshot_warnings: str = "") -> str:
        """Format review result as plain text.

        Args:
            result: The review result to format.
            snapshot_warnings: Warnings reported with the comparison.

        Returns:
            Plain-text summary.
        """
        lines: list[str] = ["", "🔍 Dependency Review Results", RULE]
        lines.extend(self._format_counts(result))

        if result.vulnerable_changes:
            lines.extend(["", "🚨 Vulnerable Dependencies:"])
            for change in result.vulnerable_changes:
                lines.append("")
                lines.append(f"{change.manifest} » {change.display_name}")
                for vuln in change.vulnerabilities:
                    lines.append(
                        f"  [{vuln.severity.value.upper()}] {vuln.advisory_ghsa_id}: "
                        f"{vuln.advisory_summary}"
                    )
                    if vuln.advisory_url:
                        lines.append(f"  {vuln.advisory_url}")

        license_issues = result.invalid_license_changes
        lines.extend(
            self._format_changes(
                "⚖️ Forbidden Licenses:",
                license_issues.forbidden,
                lambda c: f"{c.display_name} - License: {c.license or 'Unknown'}",
            )
        )
        lines.extend(
            self._format_changes(
                "❔ Unresolved Licenses:",
                license_issues.unresolved,
                lambda c: f"{c.display_name} - License: {c.license}",
            )
        )
        lines.extend(
            self._format_changes(
                "❓ Dependencies with Unknown Licenses:",
                license_issues.unlicensed,
                lambda c: c.display_name,
            )
        )
        lines.extend(
            self._format_changes(
                "🚫 Denied Dependencies:",
                result.denied_changes,
                lambda c: f"{c.display_name} is denied",
            )
        )

        if snapshot_warnings:
            lines.extend(["", "⚠️ Snapshot Warnings:", snapshot_warnings.rstrip()])

        lines.extend(self._format_scorecard(result))

        lines.extend(["", RULE])
        if result.has_issues:
            lines.append("❌ Issues found - review failed")
        else:
            lines.append("✅ No issues found - review passed")

        return "\n".join(lines) + "\n"

    def _format_counts(self, result: ReviewResult) -> list[str]:
        summary = result.summary
        lines = [
            "",
            "📊 Summary:",
            f"• Total changes: {summary.total_changes}",
            f"• Added: {summary.added}",
            f"• Removed: {summary.removed}",
        ]
        if summary.vulnerabilities > 0:
            lines.append(f"• Vulnerabilities found: {summary.vulnerabilities}")
            for label, count in (
                ("Critical", summary.critical_vulns),
                ("High", summary.high_vulns),
                ("Moderate", summary.moderate_vulns),
                ("Low", summary.low_vulns),
            ):
                if count > 0:
                    lines.append(f"  - {label}: {count}")
        return lines

    def _format_changes(
        self,
        title: str,
        changes: list[DependencyChange],
        describe: Callable[[DependencyChange], str],
    ) -> list[str]:
        if not changes:
            return []
        lines = ["", title]
        lines.extend(f"• {describe(change)}" for change in changes)
        return lines

    def _format_scorecard(self, result: ReviewResult) -> list[str]:
        if result.scorecard is None:
            return []
        scored = [e for e in result.scorecard.dependencies if e.scorecard is not None]
        if not scored:
            return []

        lines = ["", "📊 OpenSSF Scorecard:"]
        for entry in scored:
            score = entry.scorecard.score  # type: ignore[union-attr]
            lines.append(f"• {entry.change.display_name} - Score: {score}/10")
            if score < self._scorecard_warn_level:
                lines.append("  ⚠️ Low security score")
        return lines
