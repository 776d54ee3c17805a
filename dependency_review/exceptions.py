"""Custom exceptions for dependency-review."""


class DependencyReviewError(Exception):
    """Base exception for all dependency-review errors."""

    pass


class ConfigurationError(DependencyReviewError):
    """Exception raised when configuration is invalid."""

    pass


class NetworkError(DependencyReviewError):
    """Exception raised when retrieving data from a remote API fails."""

    pass


class CommentError(NetworkError):
    """Exception raised when a pull request comment cannot be posted."""

    pass
