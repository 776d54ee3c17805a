"""Base resolver interface."""

from abc import ABC, abstractmethod
from typing import Optional

from dependency_review.models.change import DependencyChange


class BaseResolver(ABC):
    """Abstract base class for repository resolvers.

    All resolvers must inherit from this class and implement the async
    resolve() method.
    """

    @abstractmethod
    async def resolve(self, change: DependencyChange) -> Optional[str]:
        """Resolve the source repository of a dependency.

        Args:
            change: The dependency change to resolve.

        Returns:
            Repository identity without protocol (e.g.
            "github.com/owner/repo"), or None if it cannot be determined.
            Implementations must not raise for remote failures.
        """
