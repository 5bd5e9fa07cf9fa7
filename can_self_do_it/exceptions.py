"""
can_self_do_it — Exceptions
===========================
Structured errors for profile composition and permission dispatch.

Configuration errors surface at actor-type setup and mean the rule
wiring is wrong. NoRuleDefined surfaces at dispatch and is a
configuration bug as well; it is never converted into a denial unless
the missing-rule policy says so. Errors raised by handlers are not
wrapped.
"""

from __future__ import annotations

from typing import Iterable


class CanSelfDoItError(Exception):
    """Base error for all dispatcher failures."""
    pass


# ══════════════════════════════════════════════════════════════
# CONFIGURATION ERRORS
# ══════════════════════════════════════════════════════════════

class ConfigurationError(CanSelfDoItError):
    """Rule sources or profile options are invalid."""
    pass


class InvalidBaseProfile(ConfigurationError):
    """Zero or more than one base profile was selected."""

    def __init__(self, found: Iterable[str]):
        self.found = tuple(found)
        if not self.found:
            detail = "none was given"
        else:
            detail = "got " + ", ".join(f"'{name}'" for name in self.found)
        super().__init__(
            "Exactly one base profile (Known or Unknown) is required; "
            f"{detail}."
        )


class InvalidActionName(ConfigurationError):
    """Action identifier is not a lowercase identifier."""

    def __init__(self, action):
        self.action = action
        super().__init__(
            f"Action {action!r} is not valid. "
            "Actions must match [a-z][a-z0-9_]*."
        )


class UnknownRuleName(ConfigurationError):
    """Strict mode: a can_* name does not resolve to a known action."""

    def __init__(self, name: str, source: str):
        self.name = name
        self.source = source
        super().__init__(
            f"Rule '{name}' in '{source}' does not name a known action. "
            "Declare the action or fix the spelling."
        )


class UnknownActionError(ConfigurationError):
    """Strict mode: dispatch was asked for an undeclared action."""

    def __init__(self, action: str, known: Iterable[str]):
        self.action = action
        self.known = tuple(sorted(known))
        super().__init__(
            f"Action '{action}' is not declared. "
            f"Known actions: {list(self.known)}"
        )


# ══════════════════════════════════════════════════════════════
# REGISTRY ERRORS
# ══════════════════════════════════════════════════════════════

class RegistryError(CanSelfDoItError):
    """Base error for actor registry operations."""
    pass


class DuplicateActorError(RegistryError):
    """Actor type already has a registered profile."""

    def __init__(self, actor_type: type):
        self.actor_type = actor_type
        super().__init__(
            f"Actor type '{actor_type.__qualname__}' is already registered."
        )


class RegistryLockedError(RegistryError):
    """Actor registry is locked; no modifications allowed."""

    def __init__(self):
        super().__init__(
            "Actor Registry is locked after bootstrap. "
            "No dynamic profile registration allowed."
        )


class ProfileNotConfigured(RegistryError):
    """Actor has neither an attached nor a registered profile."""

    def __init__(self, actor_type: type):
        self.actor_type = actor_type
        super().__init__(
            f"Actor type '{actor_type.__qualname__}' has no ActorProfile. "
            "Attach one with actor_profile() or register it."
        )


# ══════════════════════════════════════════════════════════════
# DISPATCH ERRORS
# ══════════════════════════════════════════════════════════════

class NoRuleDefined(CanSelfDoItError):
    """No specific handler, no default override and no built-in default."""

    def __init__(self, action: str, type_key: str, actor_type: type):
        self.action = action
        self.type_key = type_key
        self.actor_type = actor_type
        super().__init__(
            f"No rule defined for action '{action}' on '{type_key}' "
            f"(actor '{actor_type.__qualname__}'). Define "
            f"'can_{action}_{type_key}' or 'can_{action}_default'."
        )


class ActionNotPermitted(CanSelfDoItError):
    """Raised by authorize() when the permission check is false."""

    def __init__(self, action: str, type_key: str, actor_type: type):
        self.action = action
        self.type_key = type_key
        self.actor_type = actor_type
        super().__init__(
            f"Actor '{actor_type.__qualname__}' may not '{action}' "
            f"'{type_key}'."
        )
