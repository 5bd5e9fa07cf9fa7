"""
can_self_do_it — Actor Registry Tests
=====================================
Registration, duplicate rejection, locking and MRO-aware lookup.
"""

import pytest

from can_self_do_it import Known, Unknown, configure
from can_self_do_it.exceptions import (
    DuplicateActorError,
    ProfileNotConfigured,
    RegistryError,
    RegistryLockedError,
)
from can_self_do_it.registry import ActorRegistry


class User:
    pass


class StaffUser(User):
    pass


class AnonymousVisitor:
    pass


@pytest.fixture
def known_profile():
    return configure(base=Known)


@pytest.fixture
def unknown_profile():
    return configure(base=Unknown)


@pytest.fixture
def registry(known_profile, unknown_profile):
    registry = ActorRegistry()
    registry.register(User, known_profile)
    registry.register(AnonymousVisitor, unknown_profile)
    return registry


def test_lookup_by_instance_and_type(registry, known_profile):
    assert registry.profile_for(User()) is known_profile
    assert registry.profile_for(User) is known_profile


def test_subclass_resolves_through_mro(registry, known_profile):
    assert registry.profile_for(StaffUser()) is known_profile


def test_subclass_registration_takes_precedence(registry, unknown_profile):
    registry.register(StaffUser, unknown_profile)
    assert registry.profile_for(StaffUser()) is unknown_profile


def test_unknown_actor(registry):
    assert registry.profile_for(object()) is None
    with pytest.raises(ProfileNotConfigured):
        registry.require(object())


def test_duplicate_registration_rejected(registry, unknown_profile):
    with pytest.raises(DuplicateActorError) as exc_info:
        registry.register(User, unknown_profile)
    assert exc_info.value.actor_type is User
    assert isinstance(exc_info.value, RegistryError)


def test_register_validates_arguments(known_profile):
    registry = ActorRegistry()
    with pytest.raises(TypeError):
        registry.register(User(), known_profile)
    with pytest.raises(TypeError):
        registry.register(User, "known")


def test_lock_blocks_registration(registry, known_profile):
    registry.lock()
    assert registry.is_locked
    with pytest.raises(RegistryLockedError):
        registry.register(StaffUser, known_profile)


def test_lock_is_idempotent(registry):
    registry.lock()
    registry.lock()
    assert registry.is_locked


def test_queries(registry):
    assert len(registry) == 2
    assert User in registry
    assert StaffUser not in registry
    assert registry.actor_types() == frozenset({User, AnonymousVisitor})
