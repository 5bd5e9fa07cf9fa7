"""
can_self_do_it — Actor Registry
===============================
Maps actor types to ActorProfiles for actors whose classes cannot carry
a profile themselves (third-party user models, anonymous user objects).

Rules:
- Each actor type registers exactly once
- Lookup walks the actor's MRO, so subclasses inherit a profile
- Registry locks after bootstrap (no dynamic registration)
- Thread-safe for concurrent access

Usage:
    registry = ActorRegistry()
    registry.register(User, configure(base=Known))
    registry.register(AnonymousUser, configure(base=Unknown))
    registry.lock()

    registry.profile_for(user)
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Dict, FrozenSet, Optional

from can_self_do_it.exceptions import (
    DuplicateActorError,
    ProfileNotConfigured,
    RegistryLockedError,
)
from can_self_do_it.profile import ActorProfile

logger = logging.getLogger("can_self_do_it.registry")


class ActorRegistry:

    def __init__(self):
        self._profiles: Dict[type, ActorProfile] = {}
        self._locked: bool = False
        self._lock = Lock()

    # ══════════════════════════════════════════════════════════
    # REGISTRATION (bootstrap phase only)
    # ══════════════════════════════════════════════════════════

    def register(self, actor_type: type, profile: ActorProfile) -> None:
        """
        Register the profile for an actor type.

        Raises:
            RegistryLockedError: If registry is already locked.
            DuplicateActorError: If actor_type already registered.
            TypeError: If arguments have the wrong types.
        """
        if not isinstance(actor_type, type):
            raise TypeError(
                f"Expected a class, got {type(actor_type).__name__}."
            )
        if not isinstance(profile, ActorProfile):
            raise TypeError(
                f"Expected ActorProfile, got {type(profile).__name__}."
            )

        with self._lock:
            if self._locked:
                raise RegistryLockedError()

            if actor_type in self._profiles:
                raise DuplicateActorError(actor_type)

            self._profiles[actor_type] = profile

        logger.info(
            f"Actor registered: '{actor_type.__qualname__}' — "
            f"base={profile.base.name}, "
            f"{len(profile.overrides)} override(s)"
        )

    def lock(self) -> None:
        """Lock the registry. Idempotent."""
        with self._lock:
            if self._locked:
                return
            self._locked = True
            logger.info(
                f"Actor Registry LOCKED — {len(self._profiles)} actor type(s)"
            )

    # ══════════════════════════════════════════════════════════
    # QUERY
    # ══════════════════════════════════════════════════════════

    @property
    def is_locked(self) -> bool:
        with self._lock:
            return self._locked

    def profile_for(self, actor) -> Optional[ActorProfile]:
        """Profile for an actor instance or type. None if unknown."""
        actor_type = actor if isinstance(actor, type) else type(actor)
        with self._lock:
            for klass in actor_type.__mro__:
                profile = self._profiles.get(klass)
                if profile is not None:
                    return profile
        return None

    def require(self, actor) -> ActorProfile:
        profile = self.profile_for(actor)
        if profile is None:
            actor_type = actor if isinstance(actor, type) else type(actor)
            raise ProfileNotConfigured(actor_type)
        return profile

    def actor_types(self) -> FrozenSet[type]:
        with self._lock:
            return frozenset(self._profiles)

    def __contains__(self, actor_type) -> bool:
        with self._lock:
            return actor_type in self._profiles

    def __len__(self) -> int:
        with self._lock:
            return len(self._profiles)


default_registry = ActorRegistry()
