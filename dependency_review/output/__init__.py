"""Output formatters for dependency-review."""

from dependency_review.output.markdown import MarkdownFormatter
from dependency_review.output.review_json import ReviewJsonFormatter
from dependency_review.output.summary import SummaryFormatter
from dependency_review.output.terminal import TerminalFormatter

__all__ = [
    "MarkdownFormatter",
    "ReviewJsonFormatter",
    "SummaryFormatter",
    "TerminalFormatter",
]
