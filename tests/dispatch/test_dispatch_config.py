"""
Tests for can_self_do_it.config — dispatch options.
"""

import pytest

from can_self_do_it.config import (
    DEFAULT_CONFIG,
    MISSING_RULE_DENY,
    MISSING_RULE_RAISE,
    DispatchConfig,
)


class TestDispatchConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.strict is False
        assert DEFAULT_CONFIG.owner_attribute == "user"
        assert DEFAULT_CONFIG.missing_rule == MISSING_RULE_RAISE

    def test_deny_policy(self):
        config = DispatchConfig(missing_rule=MISSING_RULE_DENY)
        assert config.missing_rule == "deny"

    def test_invalid_missing_rule(self):
        with pytest.raises(ValueError, match="missing_rule"):
            DispatchConfig(missing_rule="ignore")

    def test_invalid_owner_attribute(self):
        with pytest.raises(ValueError, match="owner_attribute"):
            DispatchConfig(owner_attribute="owner-id")

    def test_strict_must_be_bool(self):
        with pytest.raises(ValueError, match="strict"):
            DispatchConfig(strict="yes")

    def test_frozen_immutability(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.strict = True
