"""Tests for the review policy model."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from dependency_review.models.change import Scope, Severity
from dependency_review.models.config import ReviewConfig


class TestReviewConfigDefaults:
    """Tests for ReviewConfig default values."""

    def test_defaults(self) -> None:
        """Test the default policy."""
        config = ReviewConfig()

        assert config.fail_on_severity is Severity.LOW
        assert config.fail_on_scopes == [Scope.RUNTIME]
        assert config.allow_licenses is None
        assert config.deny_licenses is None
        assert config.allow_ghsas == []
        assert config.deny_packages == []
        assert config.deny_groups == []
        assert config.license_check_exclusions == []
        assert config.license_check is True
        assert config.vulnerability_check is True
        assert config.warn_only is False
        assert config.show_openssf_scorecard is True
        assert config.warn_on_openssf_scorecard_level == 3
        assert not config.has_allow_list
        assert not config.has_deny_list


class TestReviewConfigKeys:
    """Tests for kebab-case and snake_case keys."""

    def test_kebab_case_keys(self) -> None:
        """Test configuration file keys."""
        config = ReviewConfig.model_validate(
            {
                "fail-on-severity": "high",
                "fail-on-scopes": ["runtime", "development"],
                "allow-licenses": ["MIT"],
                "license-check-exclusions": ["pkg:npm/internal/"],
            }
        )

        assert config.fail_on_severity is Severity.HIGH
        assert config.fail_on_scopes == [Scope.RUNTIME, Scope.DEVELOPMENT]
        assert config.allow_licenses == ["MIT"]
        assert config.has_allow_list
        assert config.license_check_exclusions == ["pkg:npm/internal/"]

    def test_field_names(self) -> None:
        """Test that Python field names are accepted too."""
        config = ReviewConfig(deny_licenses=["GPL-3.0-only"], warn_only=True)

        assert config.deny_licenses == ["GPL-3.0-only"]
        assert config.has_deny_list
        assert config.warn_only is True

    def test_unknown_key_rejected(self) -> None:
        """Test that typos in keys are reported."""
        with pytest.raises(ValidationError):
            ReviewConfig.model_validate({"fail-on-severty": "high"})

    def test_unknown_severity_rejected(self) -> None:
        """Test that an unrecognized severity threshold is rejected."""
        with pytest.raises(ValidationError):
            ReviewConfig.model_validate({"fail-on-severity": "urgent"})

    @pytest.mark.parametrize("level", [-1, 10.5])
    def test_scorecard_level_range(self, level: float) -> None:
        """Test that the scorecard warning level must be between 0 and 10."""
        with pytest.raises(ValidationError):
            ReviewConfig.model_validate({"warn-on-openssf-scorecard-level": level})


class TestReviewConfigPolicyRules:
    """Tests for cross-field policy validation."""

    def test_allow_and_deny_lists_are_exclusive(self) -> None:
        """Test that allow and deny license lists cannot both be set."""
        with pytest.raises(ValidationError, match="Cannot specify both"):
            ReviewConfig(allow_licenses=["MIT"], deny_licenses=["GPL-3.0-only"])

    def test_empty_lists_are_not_exclusive(self) -> None:
        """Test that an empty list does not count as configured."""
        config = ReviewConfig(allow_licenses=["MIT"], deny_licenses=[])

        assert config.has_allow_list
        assert not config.has_deny_list

    def test_both_checks_disabled_rejected(self) -> None:
        """Test that at least one check must stay enabled."""
        with pytest.raises(ValidationError, match="Cannot disable both"):
            ReviewConfig(license_check=False, vulnerability_check=False)

    def test_one_check_disabled_allowed(self) -> None:
        """Test disabling a single check."""
        config = ReviewConfig(license_check=False)
        assert config.vulnerability_check is True

    def test_is_frozen(self) -> None:
        """Test that a validated policy cannot be mutated."""
        config = ReviewConfig()
        with pytest.raises(ValidationError):
            config.warn_only = True  # type: ignore[misc]
