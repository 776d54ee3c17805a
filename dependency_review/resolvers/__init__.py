"""Repository and scorecard resolvers package."""

from dependency_review.resolvers.base import BaseResolver
from dependency_review.resolvers.repository import RepositoryResolver
from dependency_review.resolvers.scorecard import ScorecardService

__all__ = [
    "BaseResolver",
    "RepositoryResolver",
    "ScorecardService",
]
