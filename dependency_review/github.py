"""Async GitHub REST API client for dependency review."""

from __future__ import annotations

import base64
import binascii
import os
from typing import Any, Optional

import httpx
import structlog
from pydantic import ValidationError

from dependency_review.constants import GITHUB_API_URL
from dependency_review.exceptions import NetworkError
from dependency_review.models.change import ComparisonResponse, DependencyChange

log = structlog.get_logger("dependency_review.github")

SNAPSHOT_WARNINGS_HEADER = "x-github-dependency-graph-snapshot-warnings"

_NOT_FOUND_MESSAGE = (
    "Dependency review could not obtain dependency data for the specified "
    "repository or revision range. Make sure the repository exists and has "
    "dependency graph enabled."
)
_FORBIDDEN_MESSAGE = (
    "Dependency review is not supported on this repository. Please ensure "
    "that dependency graph is enabled along with GitHub Advanced Security on "
    "private repositories."
)


def decode_snapshot_warnings(value: Optional[str]) -> str:
    """Decode the base64 snapshot warnings header.

    Args:
        value: Raw header value, or None if absent.

    Returns:
        Decoded warnings text, or an empty string.
    """
    if not value:
        return ""
    try:
        return base64.b64decode(value).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError):
        log.debug("github.snapshot_warnings_undecodable")
        return ""


class GitHubClient:
    """Thin async wrapper around the GitHub REST API."""

    def __init__(
        self,
        token: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: GitHub token. Defaults to the GITHUB_TOKEN environment
                variable; anonymous access is used if neither is set.
            client: Optional httpx.AsyncClient to send requests with.
        """
        resolved_token = token or os.environ.get("GITHUB_TOKEN")
        self._headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if resolved_token:
            self._headers["Authorization"] = f"Bearer {resolved_token}"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=30.0)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        try:
            return await self._client.request(
                method, f"{GITHUB_API_URL}{path}", headers=self._headers, json=json
            )
        except httpx.RequestError as e:
            raise NetworkError(f"GitHub request failed: {e}") from e

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        raise NetworkError(
            f"GitHub API returned {response.status_code} for "
            f"{response.request.method} {response.request.url.path}"
        )

    def _json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(
                f"GitHub API returned an invalid JSON body for "
                f"{response.request.method} {response.request.url.path}: {e}"
            ) from e

    async def get_repository(self, owner: str, repo: str) -> dict[str, Any]:
        """Get repository information.

        Raises:
            NetworkError: If the repository does not exist or the request
                fails.
        """
        response = await self._request("GET", f"/repos/{owner}/{repo}")
        if response.status_code == 404:
            raise NetworkError(f"Repository {owner}/{repo} not found")
        self._raise_for_status(response)
        return self._json(response)

    async def compare_dependencies(
        self,
        owner: str,
        repo: str,
        base_ref: str,
        head_ref: str,
    ) -> ComparisonResponse:
        """Compare the dependencies of two revisions.

        Args:
            owner: Repository owner.
            repo: Repository name.
            base_ref: Base git reference (commit SHA, branch, or tag).
            head_ref: Head git reference.

        Returns:
            ComparisonResponse with the changes and decoded snapshot warnings.

        Raises:
            NetworkError: If the comparison is unavailable, the request
                fails, or the response is malformed.
        """
        response = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/dependency-graph/compare/{base_ref}...{head_ref}",
        )
        if response.status_code == 404:
            raise NetworkError(_NOT_FOUND_MESSAGE)
        if response.status_code == 403:
            raise NetworkError(_FORBIDDEN_MESSAGE)
        self._raise_for_status(response)

        try:
            data = response.json()
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            changes = [DependencyChange.model_validate(item) for item in data]
        except (ValueError, ValidationError) as e:
            raise NetworkError(f"Unexpected dependency comparison response: {e}") from e

        return ComparisonResponse(
            changes=changes,
            snapshot_warnings=decode_snapshot_warnings(
                response.headers.get(SNAPSHOT_WARNINGS_HEADER)
            ),
        )

    async def list_issue_comments(
        self, owner: str, repo: str, issue_number: int
    ) -> list[dict[str, Any]]:
        """List the comments of an issue or pull request (first 100)."""
        response = await self._request(
            "GET", f"/repos/{owner}/{repo}/issues/{issue_number}/comments?per_page=100"
        )
        self._raise_for_status(response)
        return self._json(response)

    async def create_issue_comment(
        self, owner: str, repo: str, issue_number: int, body: str
    ) -> dict[str, Any]:
        """Create a comment on an issue or pull request."""
        response = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            json={"body": body},
        )
        self._raise_for_status(response)
        return self._json(response)

    async def update_issue_comment(
        self, owner: str, repo: str, comment_id: int, body: str
    ) -> dict[str, Any]:
        """Replace the body of an existing comment."""
        response = await self._request(
            "PATCH",
            f"/repos/{owner}/{repo}/issues/comments/{comment_id}",
            json={"body": body},
        )
        self._raise_for_status(response)
        return self._json(response)

    async def delete_issue_comment(self, owner: str, repo: str, comment_id: int) -> None:
        """Delete a comment."""
        response = await self._request(
            "DELETE", f"/repos/{owner}/{repo}/issues/comments/{comment_id}"
        )
        self._raise_for_status(response)
