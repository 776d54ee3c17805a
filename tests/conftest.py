"""Shared fixtures for dependency-review tests."""
from typing import Any, Callable, Iterator

import pytest
import structlog
from click.testing import CliRunner

from dependency_review.models.change import DependencyChange


@pytest.fixture(autouse=True)
def stdlib_logging() -> Iterator[None]:
    """Route structlog events through stdlib logging instead of stdout."""
    structlog.configure(
        processors=[structlog.processors.KeyValueRenderer(key_order=["event"])],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def make_change() -> Callable[..., DependencyChange]:
    """Build a dependency change, overriding any field by keyword."""

    def _make(**overrides: Any) -> DependencyChange:
        data: dict[str, Any] = {
            "change_type": "added",
            "manifest": "package-lock.json",
            "ecosystem": "npm",
            "name": "lodash",
            "version": "4.17.20",
            "package_url": "pkg:npm/lodash@4.17.20",
            "license": "MIT",
            "source_repository_url": "https://github.com/lodash/lodash",
            "scope": "runtime",
            "vulnerabilities": [],
        }
        data.update(overrides)
        return DependencyChange.model_validate(data)

    return _make
