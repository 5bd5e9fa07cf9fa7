"""
can_self_do_it — Role Default Tests
===================================
Profiles with a base and no overrides answer with the built-in
defaults for every CRUD action.
"""

import pytest

from can_self_do_it import Action, Known, Unknown, configure
from can_self_do_it.config import DispatchConfig
from can_self_do_it.profile import LEVEL_BUILTIN_DEFAULT


class Member:
    pass


class Post:
    def __init__(self, user=None, author=None):
        self.user = user
        self.author = author


class Tag:
    """Target without any owner attribute."""


@pytest.fixture
def member():
    return Member()


@pytest.fixture
def someone_else():
    return Member()


# ══════════════════════════════════════════════════════════════
# UNKNOWN
# ══════════════════════════════════════════════════════════════

@pytest.mark.parametrize(
    "action, expected",
    [
        (Action.SEE, True),
        (Action.CREATE, False),
        (Action.EDIT, False),
        (Action.DELETE, False),
    ],
)
def test_unknown_defaults(action, expected):
    profile = configure(base=Unknown)
    visitor = Member()
    for target in (Post(), Post(user=visitor), Tag(), Post):
        assert profile.check(visitor, action, target) is expected


def test_unknown_resolves_builtin_level():
    profile = configure(base=Unknown)
    resolution = profile.resolve("edit", "post")
    assert resolution.level == LEVEL_BUILTIN_DEFAULT
    assert resolution.rule_set == "Unknown"
    assert resolution.rule_name == "can_edit_default"


# ══════════════════════════════════════════════════════════════
# KNOWN
# ══════════════════════════════════════════════════════════════

def test_known_sees_everything(member, someone_else):
    profile = configure(base=Known)
    assert profile.check(member, "see", Post(user=someone_else))
    assert profile.check(member, "see", Tag())


@pytest.mark.parametrize("action", [Action.EDIT, Action.DELETE])
def test_known_edits_and_deletes_only_own(action, member, someone_else):
    profile = configure(base=Known)
    assert profile.check(member, action, Post(user=member)) is True
    assert profile.check(member, action, Post(user=someone_else)) is False
    assert profile.check(member, action, Post()) is False
    assert profile.check(member, action, Tag()) is False


def test_known_creates_within_own_scope(member, someone_else):
    profile = configure(base=Known)
    assert profile.check(member, "create", Post()) is True
    assert profile.check(member, "create", Post(user=member)) is True
    assert profile.check(member, "create", Post(user=someone_else)) is False
    assert profile.check(member, "create", Post) is True


def test_owner_attribute_is_configurable(member, someone_else):
    profile = configure(
        base=Known, config=DispatchConfig(owner_attribute="author")
    )
    post = Post(user=someone_else, author=member)
    assert profile.check(member, "edit", post) is True
    assert profile.check(someone_else, "edit", post) is False


def test_no_builtin_default_for_custom_actions():
    for base in (Known, Unknown):
        profile = configure(base=base)
        assert profile.resolve("publish", "post") is None


def test_instance_base_uses_profile_config(member, someone_else):
    config = DispatchConfig(owner_attribute="author")
    post = Post(user=someone_else, author=member)

    from_class = configure(base=Known, config=config)
    from_instance = configure(base=Known(), config=config)

    assert from_instance.check(member, "edit", post) is True
    assert from_instance.check(member, "edit", post) == (
        from_class.check(member, "edit", post)
    )
