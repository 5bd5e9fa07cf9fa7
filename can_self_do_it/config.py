"""
can_self_do_it — Dispatch Configuration
=======================================
Options fixed when an ActorProfile is composed.

Configuration lives in code (or Django settings, see
can_self_do_it.contrib.django) and is resolved once at startup.
"""

from __future__ import annotations

from dataclasses import dataclass

MISSING_RULE_RAISE = "raise"
MISSING_RULE_DENY = "deny"

VALID_MISSING_RULE_POLICIES = frozenset({
    MISSING_RULE_RAISE,
    MISSING_RULE_DENY,
})


@dataclass(frozen=True)
class DispatchConfig:
    """
    Profile-wide dispatch options.

    strict:          reject can_* names and runtime actions that do not
                     name a CRUD or declared action
    owner_attribute: attribute the Known defaults compare to the actor
    missing_rule:    "raise" -> NoRuleDefined, "deny" -> False
    """

    strict: bool = False
    owner_attribute: str = "user"
    missing_rule: str = MISSING_RULE_RAISE

    def __post_init__(self):
        if not isinstance(self.strict, bool):
            raise ValueError("strict must be a bool.")

        if (
            not isinstance(self.owner_attribute, str)
            or not self.owner_attribute.isidentifier()
        ):
            raise ValueError("owner_attribute must be a valid identifier.")

        if self.missing_rule not in VALID_MISSING_RULE_POLICIES:
            raise ValueError(
                f"missing_rule '{self.missing_rule}' not valid. "
                f"Must be one of: {sorted(VALID_MISSING_RULE_POLICIES)}"
            )


DEFAULT_CONFIG = DispatchConfig()
