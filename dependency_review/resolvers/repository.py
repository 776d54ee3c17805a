"""Source repository resolution for dependency changes.

Resolution order:
1. The declared source repository URL, with its protocol stripped
2. For GitHub Actions, ``github.com/<owner>/<repo>`` from the action name
3. The first related project reported by deps.dev
"""

import re
from typing import Any, Optional
from urllib.parse import quote

import httpx
import structlog

from dependency_review.constants import DEPS_DEV_API_URL
from dependency_review.models.change import DependencyChange
from dependency_review.resolvers.base import BaseResolver

log = structlog.get_logger("dependency_review.resolvers")

ACTIONS_ECOSYSTEM = "actions"

# GitHub dependency graph ecosystem names that differ on deps.dev
DEPS_DEV_SYSTEMS: dict[str, str] = {
    "pip": "pypi",
    "rust": "cargo",
    "golang": "go",
}

_PROTOCOL_REGEX = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def strip_protocol(url: str) -> str:
    """Remove the protocol prefix and trailing slashes from a URL.

    Args:
        url: Repository URL (e.g., https://github.com/owner/repo/).

    Returns:
        Repository identity (e.g., github.com/owner/repo).
    """
    return _PROTOCOL_REGEX.sub("", url.strip()).rstrip("/")


def actions_repository(package_name: str) -> Optional[str]:
    """Build the repository identity of a GitHub Action.

    Action names look like ``owner/repo`` or ``owner/repo/path``.

    Args:
        package_name: The action package name.

    Returns:
        ``github.com/<owner>/<repo>``, or None if the name has fewer than
        two path segments.
    """
    parts = [part for part in package_name.split("/") if part]
    if len(parts) < 2:
        return None
    return f"github.com/{parts[0]}/{parts[1]}"


async def fetch_related_project(
    ecosystem: str,
    package_name: str,
    version: str,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[str]:
    """Look up the source project of a package version on deps.dev.

    Args:
        ecosystem: Package ecosystem as reported by the dependency graph.
        package_name: The package name.
        version: The package version.
        client: Optional shared httpx.AsyncClient for connection reuse.

    Returns:
        Project identity (e.g., github.com/owner/repo), or None if deps.dev
        has no related project or the request fails.
    """
    system = DEPS_DEV_SYSTEMS.get(ecosystem.lower(), ecosystem.lower())
    url = (
        f"{DEPS_DEV_API_URL}/v3/systems/{system}/packages/"
        f"{quote(package_name, safe='')}/versions/{quote(version, safe='')}"
    )
    log.debug("deps_dev.lookup", package=package_name, version=version)

    async def do_fetch(c: httpx.AsyncClient) -> Optional[str]:
        try:
            response = await c.get(url, timeout=httpx.Timeout(10.0))
            if response.status_code != 200:
                log.debug(
                    "deps_dev.lookup_failed",
                    package=package_name,
                    status_code=response.status_code,
                )
                return None
            data: dict[str, Any] = response.json()
        except (httpx.HTTPError, ValueError) as e:
            log.debug("deps_dev.lookup_failed", package=package_name, error=str(e))
            return None

        return _first_related_project(data)

    if client:
        return await do_fetch(client)

    async with httpx.AsyncClient() as new_client:
        return await do_fetch(new_client)


def _first_related_project(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    projects = data.get("relatedProjects")
    if not isinstance(projects, list) or not projects or not isinstance(projects[0], dict):
        return None
    project_key = projects[0].get("projectKey")
    if not isinstance(project_key, dict):
        return None
    project_id = project_key.get("id")
    return str(project_id) if project_id else None


class RepositoryResolver(BaseResolver):
    """Resolver that finds the source repository of a dependency change."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        """Initialize with an optional HTTP client.

        Args:
            client: Optional shared httpx.AsyncClient for connection reuse.
        """
        self._client = client

    async def resolve(self, change: DependencyChange) -> Optional[str]:
        """Resolve the repository identity of a dependency change.

        Args:
            change: The dependency change to resolve.

        Returns:
            Repository identity without protocol, or None if unknown.
        """
        repository: Optional[str] = None
        if change.source_repository_url:
            repository = strip_protocol(change.source_repository_url) or None

        if change.ecosystem == ACTIONS_ECOSYSTEM:
            repository = actions_repository(change.name) or repository

        if not repository:
            repository = await fetch_related_project(
                change.ecosystem, change.name, change.version, client=self._client
            )

        return repository
