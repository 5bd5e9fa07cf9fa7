"""
can_self_do_it — Actor Profiles
===============================
Composition of one base rule set and ordered override rule sets.

Resolution order for (action, type_key):
    1. can_<action>_<type_key> in overrides, registration order
    2. can_<action>_<type_key> on the base (custom Known/Unknown subclass)
    3. can_<action>_default in overrides, registration order
    4. can_<action>_default on the base
    5. nothing -> NoRuleDefined, or False under the "deny" policy

First match wins at every level. Profiles are immutable once composed
and safe to share across threads.

Usage:
    profile = configure(base=Unknown, overrides=[CommentRules])
    profile.check(visitor, "see", comment)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Tuple

from can_self_do_it.actions import (
    CRUD_ACTIONS,
    DEFAULT_KEY,
    ActionLike,
    action_name,
    rule_name,
)
from can_self_do_it.config import (
    DEFAULT_CONFIG,
    MISSING_RULE_DENY,
    DispatchConfig,
)
from can_self_do_it.defaults import DEFAULT_SELECTORS, DefaultRules
from can_self_do_it.exceptions import (
    InvalidBaseProfile,
    NoRuleDefined,
    UnknownActionError,
)
from can_self_do_it.naming import type_key_for
from can_self_do_it.ruleset import (
    Handler,
    RuleSet,
    compile_rule_set,
    source_name,
)

logger = logging.getLogger("can_self_do_it.profile")

LEVEL_SPECIFIC_OVERRIDE = "specific_override"
LEVEL_SPECIFIC_BASE = "specific_base"
LEVEL_DEFAULT_OVERRIDE = "default_override"
LEVEL_BUILTIN_DEFAULT = "builtin_default"


@dataclass(frozen=True)
class Resolution:
    """Which handler answers a check, and at which precedence level."""

    action: str
    type_key: str
    matched_key: str
    handler: Handler = field(repr=False)
    rule_set: str
    level: str

    @property
    def rule_name(self) -> str:
        return rule_name(self.action, self.matched_key)


@dataclass(frozen=True, eq=False)
class ActorProfile:
    base: RuleSet
    overrides: Tuple[RuleSet, ...] = ()
    config: DispatchConfig = DEFAULT_CONFIG
    actions: FrozenSet[str] = frozenset()

    def __post_init__(self):
        if not isinstance(self.base, RuleSet) or not self.base.is_base:
            raise ValueError("base must be a base RuleSet.")

        if not isinstance(self.overrides, tuple):
            raise ValueError("overrides must be a tuple.")

        for rule_set in self.overrides:
            if not isinstance(rule_set, RuleSet) or rule_set.is_base:
                raise ValueError("overrides must be non-base RuleSets.")

        object.__setattr__(self, "actions", frozenset(self.actions))

    @property
    def known_actions(self) -> FrozenSet[str]:
        return CRUD_ACTIONS | self.actions

    def resolve(
        self,
        action: ActionLike,
        type_key: str,
    ) -> Optional[Resolution]:
        """
        Find the handler for (action, type_key) without calling it.

        Returns None when no level matches.
        """
        action = action_name(action)
        if self.config.strict and action not in self.known_actions:
            raise UnknownActionError(action, self.known_actions)

        lookups = (
            (self.overrides, type_key, LEVEL_SPECIFIC_OVERRIDE),
            ((self.base,), type_key, LEVEL_SPECIFIC_BASE),
            (self.overrides, DEFAULT_KEY, LEVEL_DEFAULT_OVERRIDE),
            ((self.base,), DEFAULT_KEY, LEVEL_BUILTIN_DEFAULT),
        )
        for rule_sets, key, level in lookups:
            for rule_set in rule_sets:
                handler = rule_set.lookup(action, key)
                if handler is not None:
                    return Resolution(
                        action=action,
                        type_key=type_key,
                        matched_key=key,
                        handler=handler,
                        rule_set=rule_set.name,
                        level=level,
                    )
        return None

    def check(self, actor, action: ActionLike, target, *extra) -> bool:
        """Answer whether actor may perform action on target."""
        action = action_name(action)
        type_key = type_key_for(target)
        resolution = self.resolve(action, type_key)

        if resolution is None:
            if self.config.missing_rule == MISSING_RULE_DENY:
                logger.warning(
                    f"No rule for '{action}' on '{type_key}' "
                    f"(actor '{type(actor).__qualname__}'); denying"
                )
                return False
            raise NoRuleDefined(action, type_key, type(actor))

        logger.debug(
            f"{resolution.rule_name} resolved from '{resolution.rule_set}' "
            f"[{resolution.level}]"
        )
        return bool(resolution.handler(actor, target, *extra))


# ══════════════════════════════════════════════════════════════
# COMPOSITION
# ══════════════════════════════════════════════════════════════

def base_selector(source):
    """
    Return the base rule source a selector stands for, or None.

    Accepts Known/Unknown, their subclasses or instances, and the
    strings "known" / "unknown". An instance stands for its class, so
    the base is rebuilt with the profile's config.
    """
    if isinstance(source, str):
        selected = DEFAULT_SELECTORS.get(source.strip().lower())
        if selected is None:
            raise InvalidBaseProfile([source])
        return selected

    if isinstance(source, type) and issubclass(source, DefaultRules):
        return source

    if isinstance(source, DefaultRules):
        return type(source)

    return None


def compose_profile(
    *sources,
    config: DispatchConfig = DEFAULT_CONFIG,
    actions: Iterable[ActionLike] = (),
) -> ActorProfile:
    """
    Compose an ordered list of rule sources into an ActorProfile.

    Exactly one source must be a base selector; the rest are overrides
    and keep their order.

    Raises:
        InvalidBaseProfile: zero or several base selectors.
        UnknownRuleName: strict mode and a misspelled rule.
    """
    declared = frozenset(action_name(action) for action in actions)
    known_actions = CRUD_ACTIONS | declared

    bases = []
    override_sources = []
    for source in sources:
        selected = base_selector(source)
        if selected is None:
            override_sources.append(source)
        else:
            bases.append(selected)

    if len(bases) != 1:
        raise InvalidBaseProfile(source_name(base) for base in bases)

    base = compile_rule_set(
        bases[0],
        config=config,
        known_actions=known_actions,
        is_base=True,
    )
    overrides = tuple(
        compile_rule_set(source, config=config, known_actions=known_actions)
        for source in override_sources
    )

    profile = ActorProfile(
        base=base,
        overrides=overrides,
        config=config,
        actions=declared,
    )
    logger.info(
        f"ActorProfile composed: base={base.name} "
        f"overrides={[rule_set.name for rule_set in overrides]} "
        f"strict={config.strict}"
    )
    return profile


def configure(
    base,
    overrides: Iterable = (),
    *,
    config: DispatchConfig = DEFAULT_CONFIG,
    actions: Iterable[ActionLike] = (),
) -> ActorProfile:
    """
    Keyword form of compose_profile().

        configure(base=Known, overrides=[PostRules, comment_rules])
    """
    if base is None or base_selector(base) is None:
        raise InvalidBaseProfile([] if base is None else [source_name(base)])
    return compose_profile(base, *overrides, config=config, actions=actions)
