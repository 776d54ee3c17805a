"""Tests for source repository resolution."""
from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from dependency_review.models.change import DependencyChange
from dependency_review.resolvers.repository import (
    RepositoryResolver,
    actions_repository,
    fetch_related_project,
    strip_protocol,
)


def _deps_dev_payload(project_id: str) -> dict[str, Any]:
    return {"relatedProjects": [{"projectKey": {"id": project_id}, "relationType": "SOURCE_REPO"}]}


class TestStripProtocol:
    """Tests for strip_protocol function."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://github.com/owner/repo", "github.com/owner/repo"),
            ("http://github.com/owner/repo/", "github.com/owner/repo"),
            ("git+https://github.com/owner/repo", "github.com/owner/repo"),
            ("github.com/owner/repo", "github.com/owner/repo"),
        ],
    )
    def test_strips_protocol(self, url: str, expected: str) -> None:
        """Test removing the scheme and trailing slashes."""
        assert strip_protocol(url) == expected


class TestActionsRepository:
    """Tests for actions_repository function."""

    def test_owner_and_repo(self) -> None:
        """Test a plain action name."""
        assert actions_repository("actions/checkout") == "github.com/actions/checkout"

    def test_action_in_subdirectory(self) -> None:
        """Test that a path below the repository is dropped."""
        assert actions_repository("github/codeql-action/init") == "github.com/github/codeql-action"

    def test_single_segment(self) -> None:
        """Test that a name without a repository part is unresolvable."""
        assert actions_repository("checkout") is None


class TestFetchRelatedProject:
    """Tests for fetch_related_project function."""

    @pytest.mark.asyncio
    async def test_returns_first_project(self) -> None:
        """Test reading the first related project."""
        requested: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(request)
            return httpx.Response(200, json=_deps_dev_payload("github.com/psf/requests"))

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            project = await fetch_related_project("pip", "requests", "2.31.0", client=client)

        assert project == "github.com/psf/requests"
        assert requested[0].url.host == "api.deps.dev"
        assert requested[0].url.path == "/v3/systems/pypi/packages/requests/versions/2.31.0"

    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        """Test that a 404 yields None."""
        transport = httpx.MockTransport(lambda request: httpx.Response(404))
        async with httpx.AsyncClient(transport=transport) as client:
            assert await fetch_related_project("npm", "ghost", "1.0.0", client=client) is None

    @pytest.mark.asyncio
    async def test_no_related_projects(self) -> None:
        """Test that a payload without projects yields None."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
        async with httpx.AsyncClient(transport=transport) as client:
            assert await fetch_related_project("npm", "lonely", "1.0.0", client=client) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"relatedProjects": [{"projectKey": "github.com/x/y"}]},
            {"relatedProjects": [{"projectKey": None}]},
            {"relatedProjects": {"projectKey": {"id": "github.com/x/y"}}},
            {"relatedProjects": "github.com/x/y"},
            ["github.com/x/y"],
        ],
    )
    async def test_malformed_payload(self, payload: Any) -> None:
        """Test that unexpected payload shapes yield None."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=payload))
        async with httpx.AsyncClient(transport=transport) as client:
            assert await fetch_related_project("npm", "lodash", "1.0.0", client=client) is None

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        """Test that transport errors yield None."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            assert await fetch_related_project("npm", "lodash", "1.0.0", client=client) is None

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        """Test that a malformed body yields None."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="not json"))
        async with httpx.AsyncClient(transport=transport) as client:
            assert await fetch_related_project("npm", "lodash", "1.0.0", client=client) is None


class TestRepositoryResolver:
    """Tests for RepositoryResolver."""

    @pytest.mark.asyncio
    async def test_uses_declared_source_url(
        self, make_change: Callable[..., DependencyChange]
    ) -> None:
        """Test that the declared source URL wins without a network call."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("deps.dev must not be called")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            resolver = RepositoryResolver(client=client)
            repository = await resolver.resolve(make_change())

        assert repository == "github.com/lodash/lodash"

    @pytest.mark.asyncio
    async def test_actions_ecosystem(self, make_change: Callable[..., DependencyChange]) -> None:
        """Test that GitHub Actions resolve from the action name."""
        change = make_change(
            ecosystem="actions",
            name="actions/setup-node",
            version="4",
            package_url="pkg:githubactions/actions/setup-node@4",
            source_repository_url=None,
        )

        repository = await RepositoryResolver().resolve(change)

        assert repository == "github.com/actions/setup-node"

    @pytest.mark.asyncio
    async def test_falls_back_to_deps_dev(
        self, make_change: Callable[..., DependencyChange]
    ) -> None:
        """Test the deps.dev lookup when no source URL is declared."""
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, json=_deps_dev_payload("github.com/lodash/lodash"))
        )
        change = make_change(source_repository_url=None)

        async with httpx.AsyncClient(transport=transport) as client:
            repository = await RepositoryResolver(client=client).resolve(change)

        assert repository == "github.com/lodash/lodash"

    @pytest.mark.asyncio
    async def test_unresolvable(self, make_change: Callable[..., DependencyChange]) -> None:
        """Test that None is returned when nothing is known."""
        transport = httpx.MockTransport(lambda request: httpx.Response(404))
        change = make_change(source_repository_url=None)

        async with httpx.AsyncClient(transport=transport) as client:
            assert await RepositoryResolver(client=client).resolve(change) is None
