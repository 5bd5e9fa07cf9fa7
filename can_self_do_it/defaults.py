"""
can_self_do_it — Role Defaults
==============================
Built-in base rule sets. Every ActorProfile has exactly one.

Known:   identified actor; sees anything, edits and deletes what it
         owns, creates unless the target is owned by someone else.
Unknown: anonymous actor; sees anything, nothing else.

These are templates meant to be overridden per target type, not
authoritative policy. Only CRUD actions have defaults; a custom action
must be covered by an override.
"""

from __future__ import annotations

from can_self_do_it.rules import Rules


class DefaultRules(Rules):
    """Marker base for built-in role defaults."""

    selector = ""


class Known(DefaultRules):
    selector = "known"

    def owner_of(self, target):
        """Value of the configured owner attribute, None for classes."""
        if isinstance(target, type):
            return None
        return getattr(target, self.config.owner_attribute, None)

    def owned_by(self, actor, target) -> bool:
        owner = self.owner_of(target)
        return owner is not None and owner == actor

    def can_see_default(self, actor, target, *extra):
        return True

    def can_create_default(self, actor, target, *extra):
        owner = self.owner_of(target)
        return owner is None or owner == actor

    def can_edit_default(self, actor, target, *extra):
        return self.owned_by(actor, target)

    def can_delete_default(self, actor, target, *extra):
        return self.owned_by(actor, target)


class Unknown(DefaultRules):
    selector = "unknown"

    def can_see_default(self, actor, target, *extra):
        return True

    def can_create_default(self, actor, target, *extra):
        return False

    def can_edit_default(self, actor, target, *extra):
        return False

    def can_delete_default(self, actor, target, *extra):
        return False


DEFAULT_SELECTORS = {
    Known.selector: Known,
    Unknown.selector: Unknown,
}
