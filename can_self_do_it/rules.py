"""
can_self_do_it — Rule Authoring
===============================
How integrators write permission rules.

A rule is any callable named can_<action>_<type_key> (or
can_<action>_default) taking (actor, target, *extra) and returning a
truthy answer. Rules are grouped in a Rules subclass, a module, a plain
object or a mapping; ruleset.compile_rule_set() turns any of these into
an immutable RuleSet.

    class CommentRules(Rules):
        def can_see_comment(self, actor, comment):
            return comment.admin

        @rule("publish_draft", "post")
        def publish(self, actor, post):
            return post.user == actor
"""

from __future__ import annotations

from typing import Optional, Tuple

from can_self_do_it.actions import (
    CRUD_ACTIONS,
    DEFAULT_KEY,
    RULE_PREFIX,
    ActionLike,
    action_name,
)
from can_self_do_it.config import DEFAULT_CONFIG, DispatchConfig
from can_self_do_it.exceptions import InvalidActionName
from can_self_do_it.naming import as_type_key, type_key_for

RULE_KEY_ATTR = "_can_self_do_it_rule"

_DEFAULT_SUFFIX = f"_{DEFAULT_KEY}"


class Rules:
    """
    Base class for rule sources.

    Instantiated once per profile with the profile's DispatchConfig,
    so handlers can read self.config.
    """

    def __init__(self, config: DispatchConfig = DEFAULT_CONFIG):
        self.config = config

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} rules>"


def rule(action: ActionLike, type_key=DEFAULT_KEY):
    """
    Register a function under an explicit (action, type_key).

    Needed for multi-word custom actions that are not declared on the
    profile. type_key may be a class or a type name ("PostComment",
    "Shop::Item"); either is normalized to the key dispatch uses.
    """
    name = action_name(action)
    if isinstance(type_key, type):
        type_key = type_key_for(type_key)
    if not isinstance(type_key, str) or not type_key:
        raise ValueError("type_key must be a non-empty string or a class.")
    type_key = as_type_key(type_key)

    def decorator(func):
        setattr(func, RULE_KEY_ATTR, (name, type_key))
        return func

    return decorator


def explicit_rule_key(handler) -> Optional[Tuple[str, str]]:
    return getattr(handler, RULE_KEY_ATTR, None)


def _valid_action(candidate: str) -> bool:
    try:
        action_name(candidate)
    except InvalidActionName:
        return False
    return True


def parse_rule_name(
    name: str,
    known_actions=CRUD_ACTIONS,
) -> Optional[Tuple[str, str]]:
    """
    Split a handler name into (action, type_key).

    Known actions are matched longest first, so a declared
    "see_all" wins over "see". Otherwise a trailing "_default"
    marks an action-wide handler, and failing that the first token
    is taken as the action. Returns None for names that are not rules.
    """
    if not name.startswith(RULE_PREFIX):
        return None

    stem = name[len(RULE_PREFIX):]

    for action in sorted(known_actions, key=len, reverse=True):
        prefix = f"{action}_"
        if stem.startswith(prefix) and len(stem) > len(prefix):
            return action, stem[len(prefix):]

    if stem.endswith(_DEFAULT_SUFFIX):
        action = stem[:-len(_DEFAULT_SUFFIX)]
        if _valid_action(action):
            return action, DEFAULT_KEY
        return None

    action, _, type_key = stem.partition("_")
    if not type_key or not _valid_action(action):
        return None
    return action, type_key
