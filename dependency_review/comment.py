"""Post dependency review summaries as pull request comments."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

import structlog

from dependency_review.constants import COMMENT_MARKER
from dependency_review.exceptions import CommentError, NetworkError
from dependency_review.github import GitHubClient
from dependency_review.models.review import ReviewResult
from dependency_review.output.markdown import MarkdownFormatter

log = structlog.get_logger("dependency_review.comment")


class CommentMode(str, Enum):
    """When to post the review summary on the pull request."""

    ALWAYS = "always"
    ON_FAILURE = "on-failure"
    NEVER = "never"


def _find_marked_comment(comments: list[dict[str, Any]]) -> Optional[dict[str, Any]]:
    for comment in comments:
        if COMMENT_MARKER in (comment.get("body") or ""):
            return comment
    return None


class PrCommenter:
    """Create, update or delete the review comment on a pull request.

    At most one comment per pull request carries the marker; later runs
    update it in place.
    """

    def __init__(
        self,
        github_client: GitHubClient,
        formatter: Optional[MarkdownFormatter] = None,
    ) -> None:
        """Initialize the commenter.

        Args:
            github_client: Client used for the comment API calls.
            formatter: Markdown formatter for the comment body. A default
                formatter is used if not provided.
        """
        self._github = github_client
        self._formatter = formatter or MarkdownFormatter()

    async def comment_on_pr(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        mode: CommentMode,
        result: ReviewResult,
        snapshot_warnings: str = "",
    ) -> bool:
        """Post or update the review summary comment.

        Args:
            owner: Repository owner.
            repo: Repository name.
            pull_number: Pull request number.
            mode: Comment mode.
            result: Review result to summarize.
            snapshot_warnings: Warnings reported with the comparison.

        Returns:
            True if a comment was created or updated, False if the mode
            skipped commenting.

        Raises:
            CommentError: If a comment API call fails.
        """
        if mode == CommentMode.NEVER:
            return False
        if mode == CommentMode.ON_FAILURE and not result.has_issues:
            return False

        body = f"{COMMENT_MARKER}\n{self._formatter.format_review(result, snapshot_warnings)}"

        try:
            comments = await self._github.list_issue_comments(owner, repo, pull_number)
            existing = _find_marked_comment(comments)
            if existing is not None:
                await self._github.update_issue_comment(owner, repo, existing["id"], body)
                log.info("comment.updated", pull_number=pull_number, comment_id=existing["id"])
            else:
                await self._github.create_issue_comment(owner, repo, pull_number, body)
                log.info("comment.created", pull_number=pull_number)
        except NetworkError as e:
            raise CommentError(f"Failed to comment on PR: {e}") from e

        return True

    async def delete_pr_comment(self, owner: str, repo: str, pull_number: int) -> None:
        """Delete the review summary comment, if there is one.

        Failures are logged and not raised.
        """
        try:
            comments = await self._github.list_issue_comments(owner, repo, pull_number)
            existing = _find_marked_comment(comments)
            if existing is not None:
                await self._github.delete_issue_comment(owner, repo, existing["id"])
                log.info("comment.deleted", pull_number=pull_number, comment_id=existing["id"])
        except NetworkError as e:
            log.warning("comment.delete_failed", pull_number=pull_number, error=str(e))
