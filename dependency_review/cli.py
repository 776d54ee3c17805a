"""CLI entry point for dependency-review."""

from __future__ import annotations

import asyncio
import sys
from typing import Any, Optional

import click
import httpx
import structlog
from rich.console import Console

from dependency_review import __version__
from dependency_review.comment import CommentMode, PrCommenter
from dependency_review.config import load_config
from dependency_review.constants import (
    EXIT_ERROR,
    EXIT_ISSUES,
    EXIT_NETWORK_ERROR,
    EXIT_SUCCESS,
)
from dependency_review.engine import ReviewEngine
from dependency_review.exceptions import (
    ConfigurationError,
    DependencyReviewError,
    NetworkError,
)
from dependency_review.github import GitHubClient
from dependency_review.logging import setup_logging
from dependency_review.models.change import ComparisonResponse, Severity
from dependency_review.models.config import ReviewConfig
from dependency_review.models.review import ReviewResult
from dependency_review.output.markdown import MarkdownFormatter
from dependency_review.output.review_json import ReviewJsonFormatter
from dependency_review.output.summary import SummaryFormatter
from dependency_review.output.terminal import TerminalFormatter
from dependency_review.resolvers.scorecard import ScorecardService

log = structlog.get_logger("dependency_review.cli")

# Module-level console for consistent output
_console = Console()
# Separate console for error output (writes to stderr)
_error_console = Console(stderr=True)


@click.command()
@click.version_option(version=__version__)
@click.argument("owner")
@click.argument("repo")
@click.argument("base_ref")
@click.argument("head_ref")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
@click.option(
    "--output",
    "-o",
    "output_format",
    type=click.Choice(["summary", "table", "json", "markdown"], case_sensitive=False),
    default="summary",
    help="Output format (default: summary).",
)
@click.option(
    "--fail-on-severity",
    type=click.Choice([s.value for s in Severity], case_sensitive=False),
    default=None,
    help="Minimum vulnerability severity that fails the review.",
)
@click.option(
    "--warn-only",
    is_flag=True,
    default=False,
    help="Only warn, never fail the command.",
)
@click.option(
    "--no-license-check",
    is_flag=True,
    default=False,
    help="Disable license checking.",
)
@click.option(
    "--no-vulnerability-check",
    is_flag=True,
    default=False,
    help="Disable vulnerability checking.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress log messages, only show output.",
)
@click.option(
    "--comment-summary-in-pr",
    "comment_mode",
    type=click.Choice([m.value for m in CommentMode], case_sensitive=False),
    default=CommentMode.NEVER.value,
    help="Comment the summary on the pull request (default: never).",
)
@click.option(
    "--pr-number",
    type=int,
    default=None,
    help="Pull request number for commenting.",
)
def main(
    owner: str,
    repo: str,
    base_ref: str,
    head_ref: str,
    config_path: Optional[str],
    output_format: str,
    fail_on_severity: Optional[str],
    warn_only: bool,
    no_license_check: bool,
    no_vulnerability_check: bool,
    quiet: bool,
    comment_mode: str,
    pr_number: Optional[int],
) -> None:
    """Review dependency changes between two revisions of a GitHub repository.

    Checks added dependencies for vulnerabilities, license policy violations
    and denied packages. Set GITHUB_TOKEN to authenticate.

    \b
    Examples:
        dependency-review octo-org my-repo main feature-branch
        dependency-review octo-org my-repo v1.0.0 HEAD --output json
        dependency-review octo-org my-repo main HEAD -c .dependency-review.yml
        dependency-review octo-org my-repo main HEAD \\
            --comment-summary-in-pr on-failure --pr-number 42
    """
    setup_logging(level="WARNING" if quiet else None)

    overrides: dict[str, Any] = {
        "fail_on_severity": fail_on_severity.lower() if fail_on_severity else None,
        "warn_only": True if warn_only else None,
        "license_check": False if no_license_check else None,
        "vulnerability_check": False if no_vulnerability_check else None,
    }
    mode = CommentMode(comment_mode.lower())

    try:
        config = load_config(config_path, overrides=overrides)

        result, comparison = asyncio.run(_run_review(owner, repo, base_ref, head_ref, config))
        _display_result(result, comparison, config, output_format.lower())

        if mode != CommentMode.NEVER and pr_number is not None:
            log.info("comment.posting", pull_number=pr_number, mode=mode.value)
            asyncio.run(
                _post_comment(owner, repo, pr_number, mode, result, comparison, config)
            )

        if result.has_issues and not config.warn_only:
            sys.exit(EXIT_ISSUES)
        sys.exit(EXIT_SUCCESS)

    except ConfigurationError as e:
        _display_error(e, output_format)
        sys.exit(EXIT_ERROR)
    except NetworkError as e:
        _display_error(e, output_format)
        sys.exit(EXIT_NETWORK_ERROR)


async def _run_review(
    owner: str,
    repo: str,
    base_ref: str,
    head_ref: str,
    config: ReviewConfig,
) -> tuple[ReviewResult, ComparisonResponse]:
    """Fetch the dependency comparison and review it.

    A single HTTP client is shared by the GitHub calls and the scorecard
    lookups.
    """
    async with httpx.AsyncClient(timeout=30.0) as http_client:
        github = GitHubClient(client=http_client)

        log.info("github.connecting", repository=f"{owner}/{repo}")
        await github.get_repository(owner, repo)

        log.info("github.comparing", base_ref=base_ref, head_ref=head_ref)
        comparison = await github.compare_dependencies(owner, repo, base_ref, head_ref)
        if not comparison.changes:
            log.info("review.no_changes")

        engine = ReviewEngine(config, scorecard_service=ScorecardService(client=http_client))
        result = await engine.analyze(comparison)
    return result, comparison


async def _post_comment(
    owner: str,
    repo: str,
    pull_number: int,
    mode: CommentMode,
    result: ReviewResult,
    comparison: ComparisonResponse,
    config: ReviewConfig,
) -> None:
    async with httpx.AsyncClient(timeout=30.0) as http_client:
        commenter = PrCommenter(
            GitHubClient(client=http_client),
            formatter=MarkdownFormatter(config.warn_on_openssf_scorecard_level),
        )
        posted = await commenter.comment_on_pr(
            owner, repo, pull_number, mode, result, comparison.snapshot_warnings
        )
    if posted:
        log.info("comment.posted", pull_number=pull_number)


def _display_result(
    result: ReviewResult,
    comparison: ComparisonResponse,
    config: ReviewConfig,
    output_format: str,
) -> None:
    """Display review results in the specified format.

    Args:
        result: The review result to display.
        comparison: The comparison the result was computed from.
        config: Review policy, for the scorecard warning level.
        output_format: One of summary, table, json or markdown.
    """
    warn_level = config.warn_on_openssf_scorecard_level
    warnings = comparison.snapshot_warnings

    if output_format == "table":
        TerminalFormatter(console=_console, scorecard_warn_level=warn_level).format_review(
            result, warnings
        )
        return

    if output_format == "json":
        content = ReviewJsonFormatter().format_review(result, warnings)
    elif output_format == "markdown":
        content = MarkdownFormatter(warn_level).format_review(result, warnings)
    else:
        content = SummaryFormatter(warn_level).format_review(result, warnings)
    click.echo(content)


def _display_error(error: DependencyReviewError, format_type: str) -> None:
    """Display error message to user.

    All errors are written to stderr for consistent CI/CD behavior.

    Args:
        error: The exception that occurred.
        format_type: Output format type for styling.
    """
    error_type = type(error).__name__
    message = f"Error: {error_type}: {error}"

    if format_type == "table":
        _error_console.print(f"[red bold]{message}[/red bold]")
    else:
        click.echo(message, err=True)


if __name__ == "__main__":
    main()
