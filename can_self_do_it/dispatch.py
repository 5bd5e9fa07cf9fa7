"""
can_self_do_it — Runtime Dispatch
=================================
Entry points for permission checks.

    can(user, "edit", post)          -> bool
    explain(user, "edit", post)      -> Resolution | None
    authorize(user, "edit", post)    -> None or ActionNotPermitted

An actor's profile comes from its class attribute `actor_profile`
(set by acts_as_actor or by hand) or, failing that, from the registry.
Dispatch is stateless per call; handlers may read actor and target
state but the dispatcher writes nothing.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, runtime_checkable

from can_self_do_it.actions import Action, ActionLike, action_name
from can_self_do_it.config import DEFAULT_CONFIG, DispatchConfig
from can_self_do_it.exceptions import ActionNotPermitted
from can_self_do_it.naming import type_key_for
from can_self_do_it.profile import ActorProfile, Resolution, configure
from can_self_do_it.registry import ActorRegistry, default_registry

PROFILE_ATTRIBUTE = "actor_profile"


def profile_for(actor, registry: ActorRegistry | None = None) -> ActorProfile:
    """
    Profile attached to the actor's class, else the registered one.

    Raises:
        ProfileNotConfigured: neither exists.
    """
    attached = getattr(type(actor), PROFILE_ATTRIBUTE, None)
    if isinstance(attached, ActorProfile):
        return attached
    if registry is None:
        registry = default_registry
    return registry.require(type(actor))


def can(
    actor,
    action: ActionLike,
    target,
    *extra,
    registry: ActorRegistry | None = None,
) -> bool:
    return profile_for(actor, registry).check(actor, action, target, *extra)


def explain(
    actor,
    action: ActionLike,
    target,
    registry: ActorRegistry | None = None,
) -> Optional[Resolution]:
    """Resolution for the check, without calling the handler."""
    return profile_for(actor, registry).resolve(action, type_key_for(target))


def authorize(
    actor,
    action: ActionLike,
    target,
    *extra,
    registry: ActorRegistry | None = None,
) -> None:
    """
    Raise ActionNotPermitted unless the check passes.

    NoRuleDefined and handler errors propagate as with can().
    """
    if not can(actor, action, target, *extra, registry=registry):
        raise ActionNotPermitted(
            action_name(action), type_key_for(target), type(actor)
        )


# ══════════════════════════════════════════════════════════════
# CAPABILITY INTERFACE
# ══════════════════════════════════════════════════════════════

@runtime_checkable
class CapabilityInterface(Protocol):
    """What every actor-side capability object answers."""

    def can(self, action: ActionLike, target, *extra) -> bool:
        ...  # pragma: no cover

    def can_create(self, target, *extra) -> bool:
        ...  # pragma: no cover

    def can_see(self, target, *extra) -> bool:
        ...  # pragma: no cover

    def can_edit(self, target, *extra) -> bool:
        ...  # pragma: no cover

    def can_delete(self, target, *extra) -> bool:
        ...  # pragma: no cover


class CrudShortcuts:
    """
    CRUD helpers for classes that define can(action, target, *extra).

    Plain mixin, not an ABC: it must compose with model metaclasses
    such as Django's ModelBase.
    """

    def can_create(self, target, *extra) -> bool:
        return self.can(Action.CREATE, target, *extra)

    def can_see(self, target, *extra) -> bool:
        return self.can(Action.SEE, target, *extra)

    def can_edit(self, target, *extra) -> bool:
        return self.can(Action.EDIT, target, *extra)

    def can_delete(self, target, *extra) -> bool:
        return self.can(Action.DELETE, target, *extra)


class CapabilityMixin(CrudShortcuts):
    """
    Mixin for actor classes that own their profile.

        @acts_as_actor(base=Known, overrides=[PostRules])
        class User(CapabilityMixin):
            ...

        user.can_edit(post)
        user.can("publish", post)
    """

    actor_profile: Optional[ActorProfile] = None

    def can(self, action: ActionLike, target, *extra) -> bool:
        return can(self, action, target, *extra)

    def authorize(self, action: ActionLike, target, *extra) -> None:
        authorize(self, action, target, *extra)


class Capabilities(CrudShortcuts):
    """
    Capability view bound to an actor whose class cannot be changed.

    The profile is resolved once, at construction.
    """

    def __init__(
        self,
        actor,
        profile: ActorProfile | None = None,
        registry: ActorRegistry | None = None,
    ):
        self.actor = actor
        if profile is None:
            profile = profile_for(actor, registry)
        self.profile = profile

    def can(self, action: ActionLike, target, *extra) -> bool:
        return self.profile.check(self.actor, action, target, *extra)

    def explain(self, action: ActionLike, target) -> Optional[Resolution]:
        return self.profile.resolve(action, type_key_for(target))

    def authorize(self, action: ActionLike, target, *extra) -> None:
        if not self.can(action, target, *extra):
            raise ActionNotPermitted(
                action_name(action), type_key_for(target), type(self.actor)
            )


def acts_as_actor(
    base,
    overrides: Iterable = (),
    *,
    config: DispatchConfig = DEFAULT_CONFIG,
    actions: Iterable[ActionLike] = (),
    registry: ActorRegistry | None = None,
):
    """
    Class decorator: compose a profile and attach it to the actor type.

    The profile is composed once, when the class is defined. Pass a
    registry to also register the class there.
    """
    profile = configure(
        base=base, overrides=overrides, config=config, actions=actions
    )

    def decorator(cls):
        setattr(cls, PROFILE_ATTRIBUTE, profile)
        if registry is not None:
            registry.register(cls, profile)
        return cls

    return decorator
