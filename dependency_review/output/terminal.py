"""Terminal output formatter using Rich."""
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from dependency_review.models.change import DependencyChange
from dependency_review.models.review import ReviewResult, ScorecardData


class TerminalFormatter:
    """Format review results for terminal display using Rich.

    Flagged changes are shown as tables, color coded by category, below a
    summary panel with the overall status.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        scorecard_warn_level: float = 3,
    ) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
            scorecard_warn_level: Scorecard scores below this level are
                highlighted.
        """
        self._console = console if console is not None else Console()
        self._scorecard_warn_level = scorecard_warn_level

    def format_review(self, result: ReviewResult, snapshot_warnings: str = "") -> None:
        """Format and display review results.

        Args:
            result: The review result to display.
            snapshot_warnings: Warnings reported with the comparison.
        """
        if result.summary.total_changes == 0:
            self._console.print("[yellow]No dependency changes found[/yellow]")
            return

        self._print_summary(result)

        if result.vulnerable_changes:
            self._print_vulnerabilities(result.vulnerable_changes)

        license_issues = result.invalid_license_changes
        for title, changes in (
            ("Forbidden Licenses", license_issues.forbidden),
            ("Unresolved Licenses", license_issues.unresolved),
            ("Unknown Licenses", license_issues.unlicensed),
        ):
            if changes:
                self._print_license_table(title, changes)

        if result.denied_changes:
            self._console.print("")
            self._console.print(
                f"[bold red]Denied Packages ({len(result.denied_changes)})[/bold red]"
            )
            for change in result.denied_changes:
                self._console.print(
                    f"  [red]![/red] {change.display_name} ({change.package_url or 'no purl'})"
                )

        if snapshot_warnings:
            self._console.print("")
            self._console.print(
                Panel(
                    snapshot_warnings.strip(),
                    title="[bold yellow]Snapshot Warnings[/bold yellow]",
                    border_style="yellow",
                )
            )

        if result.scorecard is not None:
            self._print_scorecard(result.scorecard)

    def _print_summary(self, result: ReviewResult) -> None:
        """Print summary panel.

        Args:
            result: The review result to summarize.
        """
        summary = result.summary
        if result.has_issues:
            status, status_color = "ISSUES FOUND", "red"
        else:
            status, status_color = "PASS", "green"

        summary_lines = [
            f"Total Changes: {summary.total_changes}",
            f"Added: {summary.added}",
            f"Removed: {summary.removed}",
            f"Vulnerabilities: {summary.vulnerabilities}",
        ]
        if summary.vulnerabilities > 0:
            summary_lines.append(
                f"  Critical: {summary.critical_vulns}  High: {summary.high_vulns}  "
                f"Moderate: {summary.moderate_vulns}  Low: {summary.low_vulns}"
            )
        if result.invalid_license_changes.count > 0:
            summary_lines.append(f"License Issues: {result.invalid_license_changes.count}")
        if result.denied_changes:
            summary_lines.append(f"Denied Packages: {len(result.denied_changes)}")

        summary_lines.extend(["", f"Status: [{status_color}]{status}[/{status_color}]"])

        panel = Panel(
            "\n".join(summary_lines),
            title="[bold]DEPENDENCY REVIEW[/bold]",
            border_style=status_color,
        )
        self._console.print(panel)

    def _print_vulnerabilities(self, changes: list[DependencyChange]) -> None:
        table = Table(title="Vulnerable Dependencies")
        table.add_column("Manifest", style="dim")
        table.add_column("Package", style="cyan", no_wrap=True)
        table.add_column("Severity", style="red")
        table.add_column("Advisory")

        for change in changes:
            for vuln in change.vulnerabilities:
                table.add_row(
                    change.manifest,
                    change.display_name,
                    vuln.severity.value,
                    f"{vuln.advisory_ghsa_id} {vuln.advisory_summary}".strip(),
                )
        self._console.print(table)

    def _print_license_table(self, title: str, changes: list[DependencyChange]) -> None:
        table = Table(title=title)
        table.add_column("Package", style="cyan", no_wrap=True)
        table.add_column("License", style="yellow")

        for change in changes:
            table.add_row(change.display_name, change.license or "Unknown")
        self._console.print(table)

    def _print_scorecard(self, scorecard: ScorecardData) -> None:
        if not scorecard.dependencies:
            return

        table = Table(title="OpenSSF Scorecard")
        table.add_column("Package", style="cyan", no_wrap=True)
        table.add_column("Score")

        for entry in scorecard.dependencies:
            if entry.scorecard is None:
                table.add_row(entry.change.display_name, "[dim]unavailable[/dim]")
                continue
            score = entry.scorecard.score
            color = "yellow" if score < self._scorecard_warn_level else "green"
            table.add_row(entry.change.display_name, f"[{color}]{score}/10[/{color}]")
        self._console.print(table)
