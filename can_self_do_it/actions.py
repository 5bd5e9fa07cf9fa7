"""
can_self_do_it — Actions
========================
Action identifiers. The CRUD members have built-in defaults; any other
lowercase identifier is a custom action that needs an override.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Union

from can_self_do_it.exceptions import InvalidActionName


class Action(str, Enum):
    CREATE = "create"
    SEE = "see"
    EDIT = "edit"
    DELETE = "delete"

    def __str__(self) -> str:
        return self.value


CRUD_ACTIONS = frozenset(action.value for action in Action)

# Reserved type key for action-wide handlers (can_<action>_default).
DEFAULT_KEY = "default"

RULE_PREFIX = "can_"

_ACTION_RE = re.compile(r"^[a-z][a-z0-9_]*$")

ActionLike = Union[Action, str]


def action_name(action: ActionLike) -> str:
    """Return the plain string form of an action, validating it."""
    if isinstance(action, Action):
        return action.value
    if not isinstance(action, str) or not _ACTION_RE.match(action):
        raise InvalidActionName(action)
    if action.endswith("_") or "__" in action:
        raise InvalidActionName(action)
    return action


def rule_name(action: ActionLike, type_key: str) -> str:
    """Handler name for an action/type pair, e.g. can_edit_post."""
    return f"{RULE_PREFIX}{action_name(action)}_{type_key}"
