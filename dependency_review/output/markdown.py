"""Markdown output formatter for dependency review results."""

from datetime import datetime, timezone

from dependency_review.models.change import DependencyChange
from dependency_review.models.review import ReviewResult, ScorecardData


def _escape(value: str) -> str:
    """Escape pipe characters so a value fits in a table cell."""
    return value.replace("|", "\\|")


class MarkdownFormatter:
    """Format review results as Markdown output.

    Used for pull request comments and for saving reports alongside CI
    artifacts.
    """

    def __init__(self, scorecard_warn_level: float = 3) -> None:
        """Initialize the formatter.

        Args:
            scorecard_warn_level: Scorecard scores below this level are
                flagged in the scorecard table.
        """
        self._scorecard_warn_level = scorecard_warn_level

    def format_review(self, result: ReviewResult, snapshot_warnings: str = "") -> str:
        """Format review result as Markdown string.

        Args:
            result: The review result to format.
            snapshot_warnings: Warnings reported with the comparison.

        Returns:
            Markdown string representation of the review result.
        """
        lines: list[str] = ["# Dependency Review", ""]

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        lines.append(f"*Generated: {timestamp}*")
        lines.append("")

        lines.extend(self._format_summary(result))
        lines.append("")

        if result.vulnerable_changes:
            lines.extend(self._format_vulnerabilities(result.vulnerable_changes))
            lines.append("")

        license_issues = result.invalid_license_changes
        for title, changes in (
            ("Forbidden Licenses", license_issues.forbidden),
            ("Unresolved Licenses", license_issues.unresolved),
            ("Unknown Licenses", license_issues.unlicensed),
        ):
            if changes:
                lines.extend(self._format_license_table(title, changes))
                lines.append("")

        if result.denied_changes:
            lines.extend(self._format_denied(result.denied_changes))
            lines.append("")

        if snapshot_warnings:
            lines.extend(["## Snapshot Warnings", "", f"> {snapshot_warnings.strip()}", ""])

        if result.scorecard is not None:
            lines.extend(self._format_scorecard(result.scorecard))

        return "\n".join(lines).rstrip("\n") + "\n"

    def _format_summary(self, result: ReviewResult) -> list[str]:
        summary = result.summary
        if result.has_issues:
            status = "❌ ISSUES FOUND"
        else:
            status = "✅ PASS"

        lines = [
            "## Summary",
            "",
            "| Metric | Value |",
            "|--------|-------|",
            f"| Total Changes | {summary.total_changes} |",
            f"| Added | {summary.added} |",
            f"| Removed | {summary.removed} |",
            f"| Vulnerabilities | {summary.vulnerabilities} |",
        ]
        for label, count in (
            ("Critical", summary.critical_vulns),
            ("High", summary.high_vulns),
            ("Moderate", summary.moderate_vulns),
            ("Low", summary.low_vulns),
        ):
            if count > 0:
                lines.append(f"| {label} | {count} |")

        license_count = result.invalid_license_changes.count
        if license_count > 0:
            lines.append(f"| License Issues | {license_count} |")
        if result.denied_changes:
            lines.append(f"| Denied Packages | {len(result.denied_changes)} |")

        lines.append(f"| **Status** | **{status}** |")
        return lines

    def _format_vulnerabilities(self, changes: list[DependencyChange]) -> list[str]:
        lines = [
            "## Vulnerabilities",
            "",
            "| Manifest | Package | Severity | Advisory |",
            "|----------|---------|----------|----------|",
        ]
        for change in changes:
            for vuln in change.vulnerabilities:
                advisory = vuln.advisory_ghsa_id
                if vuln.advisory_url:
                    advisory = f"[{advisory}]({vuln.advisory_url})"
                if vuln.advisory_summary:
                    advisory += f": {_escape(vuln.advisory_summary)}"
                lines.append(
                    f"| {_escape(change.manifest)} | {_escape(change.display_name)} | "
                    f"{vuln.severity.value} | {advisory} |"
                )
        return lines

    def _format_license_table(self, title: str, changes: list[DependencyChange]) -> list[str]:
        lines = [
            f"## {title}",
            "",
            "| Manifest | Package | License |",
            "|----------|---------|---------|",
        ]
        for change in changes:
            license_display = _escape(change.license) if change.license else "*Unknown*"
            lines.append(
                f"| {_escape(change.manifest)} | {_escape(change.display_name)} | "
                f"{license_display} |"
            )
        return lines

    def _format_denied(self, changes: list[DependencyChange]) -> list[str]:
        lines = [
            "## Denied Packages",
            "",
            "| Manifest | Package | Package URL |",
            "|----------|---------|-------------|",
        ]
        for change in changes:
            lines.append(
                f"| {_escape(change.manifest)} | {_escape(change.display_name)} | "
                f"`{change.package_url or ''}` |"
            )
        return lines

    def _format_scorecard(self, scorecard: ScorecardData) -> list[str]:
        """Format the OpenSSF Scorecard table.

        Entries without a scorecard are listed as unavailable so the table
        covers every added change.
        """
        if not scorecard.dependencies:
            return []

        lines = [
            "## OpenSSF Scorecard",
            "",
            "| Package | Score | |",
            "|---------|-------|---|",
        ]
        for entry in scorecard.dependencies:
            name = _escape(entry.change.display_name)
            if entry.scorecard is None:
                lines.append(f"| {name} | *Unavailable* | |")
                continue
            score = entry.scorecard.score
            marker = "⚠️" if score < self._scorecard_warn_level else "✅"
            lines.append(f"| {name} | {score}/10 | {marker} |")
        lines.append("")
        return lines
