"""
can_self_do_it — Public API
===========================
Convention-based permission dispatch for known and unknown actors.
"""

from can_self_do_it.actions import CRUD_ACTIONS, DEFAULT_KEY, Action, rule_name
from can_self_do_it.config import (
    DEFAULT_CONFIG,
    MISSING_RULE_DENY,
    MISSING_RULE_RAISE,
    DispatchConfig,
)
from can_self_do_it.defaults import Known, Unknown
from can_self_do_it.dispatch import (
    Capabilities,
    CapabilityInterface,
    CapabilityMixin,
    acts_as_actor,
    authorize,
    can,
    explain,
    profile_for,
)
from can_self_do_it.exceptions import (
    ActionNotPermitted,
    CanSelfDoItError,
    ConfigurationError,
    DuplicateActorError,
    InvalidActionName,
    InvalidBaseProfile,
    NoRuleDefined,
    ProfileNotConfigured,
    RegistryError,
    RegistryLockedError,
    UnknownActionError,
    UnknownRuleName,
)
from can_self_do_it.naming import as_type_key, normalize, type_key_for
from can_self_do_it.profile import (
    ActorProfile,
    Resolution,
    compose_profile,
    configure,
)
from can_self_do_it.registry import ActorRegistry, default_registry
from can_self_do_it.rules import Rules, rule
from can_self_do_it.ruleset import RuleSet, compile_rule_set

__all__ = [
    "Action",
    "CRUD_ACTIONS",
    "DEFAULT_KEY",
    "rule_name",
    "DispatchConfig",
    "DEFAULT_CONFIG",
    "MISSING_RULE_RAISE",
    "MISSING_RULE_DENY",
    "Known",
    "Unknown",
    "Rules",
    "rule",
    "RuleSet",
    "compile_rule_set",
    "ActorProfile",
    "Resolution",
    "compose_profile",
    "configure",
    "ActorRegistry",
    "default_registry",
    "can",
    "explain",
    "authorize",
    "profile_for",
    "acts_as_actor",
    "CapabilityInterface",
    "CapabilityMixin",
    "Capabilities",
    "normalize",
    "type_key_for",
    "as_type_key",
    "CanSelfDoItError",
    "ConfigurationError",
    "InvalidBaseProfile",
    "InvalidActionName",
    "UnknownRuleName",
    "UnknownActionError",
    "RegistryError",
    "DuplicateActorError",
    "RegistryLockedError",
    "ProfileNotConfigured",
    "NoRuleDefined",
    "ActionNotPermitted",
]
