"""
can_self_do_it — Compiled Rule Sets
===================================
Immutable (action, type_key) -> handler mappings.

Handler names are parsed once, when a profile is composed. Dispatch
then does a dictionary lookup instead of looking methods up by name.

Non-strict compilation keeps the forgiving behaviour of name-based
rules: a can_* name that cannot be parsed is skipped, and a rule for an
undeclared action is registered as-is. A misspelled action therefore
never matches and the check falls through to the defaults. Strict
compilation turns both cases into UnknownRuleName.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple

from can_self_do_it.actions import CRUD_ACTIONS, RULE_PREFIX, rule_name
from can_self_do_it.config import DEFAULT_CONFIG, DispatchConfig
from can_self_do_it.exceptions import ConfigurationError, UnknownRuleName
from can_self_do_it.rules import Rules, explicit_rule_key, parse_rule_name

logger = logging.getLogger("can_self_do_it.ruleset")

Handler = Callable[..., Any]
RuleKey = Tuple[str, str]


@dataclass(frozen=True, eq=False)
class RuleSet:
    """
    Read-only rule mapping for one source.

    is_base marks the Known/Unknown (or subclass) rule set of a profile.
    """

    name: str
    handlers: Mapping[RuleKey, Handler]
    is_base: bool = False

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise ValueError("name must be a non-empty string.")
        object.__setattr__(
            self, "handlers", MappingProxyType(dict(self.handlers))
        )

    def lookup(self, action: str, type_key: str) -> Optional[Handler]:
        return self.handlers.get((action, type_key))

    def rule_names(self) -> Tuple[str, ...]:
        """Handler names in sorted order, e.g. ('can_edit_post', ...)."""
        return tuple(sorted(
            rule_name(action, type_key) for action, type_key in self.handlers
        ))

    def __contains__(self, key) -> bool:
        return key in self.handlers

    def __len__(self) -> int:
        return len(self.handlers)

    def __repr__(self) -> str:
        return f"RuleSet(name={self.name!r}, rules={len(self.handlers)})"


# ══════════════════════════════════════════════════════════════
# COMPILATION
# ══════════════════════════════════════════════════════════════

def source_name(source) -> str:
    if isinstance(source, Rules):
        return type(source).__qualname__
    name = getattr(source, "__qualname__", None) or getattr(
        source, "__name__", None
    )
    return name or type(source).__qualname__


def _instantiate(source, config: DispatchConfig):
    if isinstance(source, type) and issubclass(source, Rules):
        return source(config)
    return source


def _candidates(source) -> Iterator[Tuple[str, Handler]]:
    if isinstance(source, Mapping):
        items = list(source.items())
    else:
        items = [
            (name, getattr(source, name))
            for name in dir(source)
            if not name.startswith("_")
        ]

    for name, value in items:
        if not isinstance(name, str) or not callable(value):
            continue
        if isinstance(value, type):
            continue
        if name.startswith(RULE_PREFIX) or explicit_rule_key(value):
            yield name, value


def compile_rule_set(
    source,
    *,
    config: DispatchConfig = DEFAULT_CONFIG,
    known_actions=CRUD_ACTIONS,
    is_base: bool = False,
    name: Optional[str] = None,
) -> RuleSet:
    """
    Build a RuleSet from a Rules class/instance, module, object or mapping.

    Raises:
        UnknownRuleName: strict mode, name unparseable or action unknown.
        ConfigurationError: two handlers claim the same (action, type_key).
    """
    instance = _instantiate(source, config)
    label = name or source_name(instance)
    known_actions = frozenset(known_actions)
    handlers: Dict[RuleKey, Handler] = {}
    origins: Dict[RuleKey, str] = {}

    for attr_name, handler in _candidates(instance):
        key = explicit_rule_key(handler) or parse_rule_name(
            attr_name, known_actions
        )

        if key is None:
            if config.strict:
                raise UnknownRuleName(attr_name, label)
            logger.debug(f"Skipping '{attr_name}' in '{label}': not a rule name")
            continue

        action, _ = key
        if action not in known_actions:
            if config.strict:
                raise UnknownRuleName(attr_name, label)
            logger.debug(
                f"Rule '{attr_name}' in '{label}' uses undeclared "
                f"action '{action}'"
            )

        if key in handlers:
            raise ConfigurationError(
                f"Rule set '{label}' defines '{rule_name(*key)}' twice "
                f"('{origins[key]}' and '{attr_name}')."
            )

        handlers[key] = handler
        origins[key] = attr_name

    return RuleSet(name=label, handlers=handlers, is_base=is_base)
