"""Dependency review - policy checks for dependency changes between revisions."""

__version__ = "0.1.0"
