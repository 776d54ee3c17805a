"""OpenSSF Scorecard lookups for dependency changes.

Lookups run in batches of BATCH_SIZE concurrent resolutions. Results are
cached per repository for the lifetime of a ScorecardService instance, and
concurrent lookups of the same repository share a single request.
"""

import asyncio
from typing import Optional

import httpx
import structlog

from dependency_review.constants import SCORECARD_API_URL
from dependency_review.models.change import DependencyChange
from dependency_review.models.review import Scorecard, ScorecardData, ScorecardEntry
from dependency_review.resolvers.base import BaseResolver
from dependency_review.resolvers.repository import RepositoryResolver

log = structlog.get_logger("dependency_review.resolvers")

# Concurrent repository resolutions per batch
BATCH_SIZE = 5

DEFAULT_TIMEOUT = 10.0


class ScorecardService:
    """Resolve OpenSSF Scorecard results for dependency changes.

    Create one instance per review; the cache is not shared between
    instances.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        resolver: Optional[BaseResolver] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the service.

        Args:
            client: Optional shared httpx.AsyncClient for connection reuse.
                If not provided, a client is created per call to
                get_scorecard_levels().
            resolver: Optional repository resolver. Defaults to a
                RepositoryResolver using the same HTTP client.
            timeout: Timeout in seconds for each scorecard request.
        """
        self._client = client
        self._resolver = resolver
        self._timeout = timeout
        self._cache: dict[str, Scorecard] = {}
        self._pending: dict[str, asyncio.Task[Optional[Scorecard]]] = {}

    async def get_scorecard_levels(
        self, changes: list[DependencyChange]
    ) -> ScorecardData:
        """Look up scorecards for the given changes.

        Args:
            changes: Dependency changes, normally only added ones. Removed
                changes are kept in the output with no scorecard.

        Returns:
            ScorecardData with one entry per change, in input order. Entries
            whose repository or scorecard cannot be found have
            ``scorecard=None``.
        """
        if self._client:
            return await self._collect(changes, self._client)

        async with httpx.AsyncClient() as new_client:
            return await self._collect(changes, new_client)

    async def _collect(
        self, changes: list[DependencyChange], client: httpx.AsyncClient
    ) -> ScorecardData:
        resolver = self._resolver or RepositoryResolver(client=client)
        entries: list[ScorecardEntry] = []

        for start in range(0, len(changes), BATCH_SIZE):
            chunk = changes[start : start + BATCH_SIZE]
            scorecards = await asyncio.gather(
                *(self._lookup(change, resolver, client) for change in chunk)
            )
            entries.extend(
                ScorecardEntry(change=change, scorecard=scorecard)
                for change, scorecard in zip(chunk, scorecards)
            )

        return ScorecardData(dependencies=entries)

    async def _lookup(
        self,
        change: DependencyChange,
        resolver: BaseResolver,
        client: httpx.AsyncClient,
    ) -> Optional[Scorecard]:
        if not change.is_added:
            return None

        repository = await resolver.resolve(change)
        if not repository:
            log.debug("scorecard.no_repository", package=change.name)
            return None

        return await self.get_scorecard(repository, client)

    async def get_scorecard(
        self, repository: str, client: httpx.AsyncClient
    ) -> Optional[Scorecard]:
        """Get the scorecard of a repository, using the cache when possible.

        Args:
            repository: Repository identity (e.g., github.com/owner/repo).
            client: HTTP client for the request.

        Returns:
            Scorecard, or None if it could not be retrieved.
        """
        cached = self._cache.get(repository)
        if cached is not None:
            return cached

        pending = self._pending.get(repository)
        if pending is not None:
            return await pending

        # Registered before the first await so concurrent callers find it
        task = asyncio.ensure_future(self._fetch_scorecard(repository, client))
        self._pending[repository] = task
        try:
            scorecard = await task
        finally:
            self._pending.pop(repository, None)

        if scorecard is not None:
            self._cache[repository] = scorecard
        return scorecard

    async def _fetch_scorecard(
        self, repository: str, client: httpx.AsyncClient
    ) -> Optional[Scorecard]:
        url = f"{SCORECARD_API_URL}/projects/{repository}"
        try:
            response = await client.get(url, timeout=httpx.Timeout(self._timeout))
            if not response.is_success:
                log.debug(
                    "scorecard.lookup_failed",
                    repository=repository,
                    status_code=response.status_code,
                )
                return None
            return Scorecard.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            log.debug("scorecard.lookup_failed", repository=repository, error=str(e))
            return None
