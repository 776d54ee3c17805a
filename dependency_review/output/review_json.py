"""JSON output formatter for dependency review results."""
import json
from datetime import datetime, timezone
from typing import Any

from dependency_review import __version__
from dependency_review.models.review import ReviewResult


class ReviewJsonFormatter:
    """Format review results as JSON output.

    Every field of the review result is preserved, for programmatic
    processing and CI/CD integration.
    """

    def format_review(self, result: ReviewResult, snapshot_warnings: str = "") -> str:
        """Format review result as JSON string.

        Args:
            result: The review result to format.
            snapshot_warnings: Warnings reported with the comparison.

        Returns:
            JSON string representation of the review result.
        """
        output = self._build_output(result, snapshot_warnings)
        return json.dumps(output, indent=2)

    def _build_output(self, result: ReviewResult, snapshot_warnings: str) -> dict[str, Any]:
        output: dict[str, Any] = {"review_metadata": self._build_review_metadata()}
        output.update(result.model_dump(mode="json"))
        output["snapshot_warnings"] = snapshot_warnings
        return output

    def _build_review_metadata(self) -> dict[str, Any]:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        return {
            "generated_at": timestamp,
            "tool_version": __version__,
        }
