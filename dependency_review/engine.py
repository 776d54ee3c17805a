"""Review engine: applies the review policy to a set of dependency changes."""
from __future__ import annotations

from typing import Optional

import structlog

from dependency_review.analysis.denial import filter_denied_changes
from dependency_review.analysis.licenses import filter_invalid_licenses
from dependency_review.analysis.summary import determine_has_issues, generate_summary
from dependency_review.analysis.vulnerabilities import filter_vulnerable_changes
from dependency_review.models.change import ComparisonResponse, DependencyChange
from dependency_review.models.config import ReviewConfig
from dependency_review.models.review import LicenseIssues, ReviewResult, ScorecardData
from dependency_review.resolvers.scorecard import ScorecardService

log = structlog.get_logger("dependency_review.engine")


def review_changes(
    changes: list[DependencyChange],
    config: ReviewConfig,
) -> ReviewResult:
    """Evaluate dependency changes against the review policy.

    Runs the vulnerability and license checks enabled in ``config``, the
    package denial rules, and builds the summary. Performs no I/O; the
    returned result has no scorecard data.

    Args:
        changes: All dependency changes of the comparison.
        config: Validated review policy.

    Returns:
        ReviewResult with flagged changes, summary and has_issues.
    """
    vulnerable_changes = (
        filter_vulnerable_changes(changes, config) if config.vulnerability_check else []
    )
    license_issues = (
        filter_invalid_licenses(changes, config) if config.license_check else LicenseIssues()
    )
    denied_changes = filter_denied_changes(changes, config)

    return ReviewResult(
        vulnerable_changes=vulnerable_changes,
        invalid_license_changes=license_issues,
        denied_changes=denied_changes,
        scorecard=None,
        has_issues=determine_has_issues(
            vulnerable_changes, license_issues, denied_changes, config
        ),
        summary=generate_summary(changes, vulnerable_changes),
    )


async def _scorecard_levels(
    changes: list[DependencyChange],
    service: ScorecardService,
) -> Optional[ScorecardData]:
    added = [change for change in changes if change.is_added]
    try:
        return await service.get_scorecard_levels(added)
    except Exception:
        # Review result stands without scorecard data
        log.warning("scorecard.enrichment_failed", exc_info=True)
        return None


async def evaluate(
    changes: list[DependencyChange],
    config: ReviewConfig,
    scorecard_service: Optional[ScorecardService] = None,
) -> ReviewResult:
    """Evaluate dependency changes, with optional scorecard enrichment.

    Args:
        changes: All dependency changes of the comparison.
        config: Validated review policy.
        scorecard_service: Service used for scorecard lookups when
            ``config.show_openssf_scorecard`` is set. A new instance is
            created if not provided.

    Returns:
        ReviewResult. Scorecard data never influences has_issues.
    """
    result = review_changes(changes, config)
    if not config.show_openssf_scorecard:
        return result

    service = scorecard_service or ScorecardService()
    scorecard = await _scorecard_levels(changes, service)
    return result.model_copy(update={"scorecard": scorecard})


class ReviewEngine:
    """Analyze the dependency changes of a comparison."""

    def __init__(
        self,
        config: ReviewConfig,
        scorecard_service: Optional[ScorecardService] = None,
    ) -> None:
        """Initialize the engine.

        Args:
            config: Validated review policy.
            scorecard_service: Optional scorecard service to reuse.
        """
        self._config = config
        self._scorecard_service = scorecard_service

    @property
    def config(self) -> ReviewConfig:
        """The review policy."""
        return self._config

    async def analyze(self, comparison: ComparisonResponse) -> ReviewResult:
        """Analyze a comparison.

        Args:
            comparison: Dependency changes between two revisions.

        Returns:
            ReviewResult for the comparison's changes.
        """
        if not comparison.changes:
            return ReviewResult.empty()

        log.info("review.analyzing", changes=len(comparison.changes))
        return await evaluate(
            comparison.changes, self._config, scorecard_service=self._scorecard_service
        )
