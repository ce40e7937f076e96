"""Tests for merging review options over the defaults."""

import pytest

from codecheck.analysis.config import DEFAULT_CONFIG, merge_config, parse_config, resolve_config
from codecheck.analysis.models import AnalysisConfig, IssueType, Severity
from codecheck.core.exceptions import InvalidConfigError


class TestDefaults:
    """Test the default option values."""

    def test_default_values(self):
        config = AnalysisConfig()
        assert config.check_security is True
        assert config.check_performance is True
        assert config.check_best_practices is True
        assert config.check_accessibility is False
        assert config.severity_threshold == Severity.MEDIUM
        assert config.frameworks == frozenset({"react", "next.js", "express"})
        assert config.languages == frozenset({"typescript", "javascript"})

    def test_default_categories(self):
        assert DEFAULT_CONFIG.enabled_categories() == [
            IssueType.SECURITY,
            IssueType.PERFORMANCE,
            IssueType.BEST_PRACTICE,
        ]

    def test_config_is_frozen(self):
        with pytest.raises(Exception):
            DEFAULT_CONFIG.check_security = False


class TestMergeConfig:
    """Test partial overrides."""

    def test_none_keeps_defaults(self):
        assert merge_config(DEFAULT_CONFIG, None) == DEFAULT_CONFIG

    def test_empty_mapping_keeps_defaults(self):
        assert merge_config(DEFAULT_CONFIG, {}) == DEFAULT_CONFIG

    def test_camel_case_override(self):
        config = merge_config(DEFAULT_CONFIG, {"checkSecurity": False, "checkAccessibility": True})
        assert config.check_security is False
        assert config.check_accessibility is True
        assert config.check_performance is True
        assert config.enabled_categories() == [
            IssueType.PERFORMANCE,
            IssueType.BEST_PRACTICE,
            IssueType.ACCESSIBILITY,
        ]

    def test_snake_case_override(self):
        config = merge_config(DEFAULT_CONFIG, {"check_performance": False})
        assert config.check_performance is False

    @pytest.mark.parametrize("key", ["severity", "severityThreshold", "severity_threshold"])
    def test_severity_aliases(self, key):
        config = merge_config(DEFAULT_CONFIG, {key: "HIGH"})
        assert config.severity_threshold == Severity.HIGH

    def test_lists_become_frozensets(self):
        config = merge_config(DEFAULT_CONFIG, {"frameworks": ["react"], "languages": ["typescript"]})
        assert config.frameworks == frozenset({"react"})
        assert config.languages == frozenset({"typescript"})

    def test_unknown_keys_are_ignored(self):
        assert merge_config(DEFAULT_CONFIG, {"autoFix": True}) == DEFAULT_CONFIG

    def test_override_does_not_touch_default(self):
        merge_config(DEFAULT_CONFIG, {"checkSecurity": False})
        assert DEFAULT_CONFIG.check_security is True

    def test_invalid_value(self):
        with pytest.raises(InvalidConfigError):
            merge_config(DEFAULT_CONFIG, {"severity": "catastrophic"})

    def test_non_mapping(self):
        with pytest.raises(InvalidConfigError):
            parse_config(["checkSecurity"])


class TestResolveConfig:
    """Test layering several overrides."""

    def test_later_overrides_win(self):
        config = resolve_config({"checkSecurity": False, "severity": "low"}, {"checkSecurity": True})
        assert config.check_security is True
        assert config.severity_threshold == Severity.LOW

    def test_no_overrides(self):
        assert resolve_config() == DEFAULT_CONFIG
        assert resolve_config(None, None) == DEFAULT_CONFIG
