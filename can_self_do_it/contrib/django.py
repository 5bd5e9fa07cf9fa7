"""
can_self_do_it — Django Integration
===================================
Reads dispatch options from Django settings, registers Django's user
types as actors and namespaces model type keys by app label.

    # settings.py
    CAN_SELF_DO_IT = {
        "STRICT": True,
        "OWNER_ATTRIBUTE": "author",
        "MISSING_RULE": "raise",
    }

    # apps.py, in ready()
    register_user_profiles(known_overrides=[PostRules])
    default_registry.lock()
"""

from __future__ import annotations

from typing import Iterable, Mapping, Tuple

from django.conf import settings as django_settings

from can_self_do_it.actions import ActionLike
from can_self_do_it.config import DEFAULT_CONFIG, DispatchConfig
from can_self_do_it.defaults import Known, Unknown
from can_self_do_it.exceptions import ConfigurationError
from can_self_do_it.profile import ActorProfile, configure
from can_self_do_it.registry import ActorRegistry, default_registry

SETTINGS_NAME = "CAN_SELF_DO_IT"

SETTINGS_KEYS = {
    "STRICT": "strict",
    "OWNER_ATTRIBUTE": "owner_attribute",
    "MISSING_RULE": "missing_rule",
}


def config_from_settings(settings=None) -> DispatchConfig:
    """Build a DispatchConfig from settings.CAN_SELF_DO_IT."""
    settings = django_settings if settings is None else settings
    options = getattr(settings, SETTINGS_NAME, None)
    if options is None:
        return DEFAULT_CONFIG

    if not isinstance(options, Mapping):
        raise ConfigurationError(f"{SETTINGS_NAME} must be a dict.")

    unknown = sorted(set(options) - set(SETTINGS_KEYS))
    if unknown:
        raise ConfigurationError(
            f"{SETTINGS_NAME} has unknown keys {unknown}. "
            f"Allowed: {sorted(SETTINGS_KEYS)}"
        )

    try:
        return DispatchConfig(**{
            SETTINGS_KEYS[key]: value for key, value in options.items()
        })
    except ValueError as exc:
        raise ConfigurationError(f"{SETTINGS_NAME}: {exc}") from exc


def register_user_profiles(
    *,
    known_overrides: Iterable = (),
    unknown_overrides: Iterable = (),
    actions: Iterable[ActionLike] = (),
    config: DispatchConfig | None = None,
    registry: ActorRegistry | None = None,
) -> Tuple[ActorProfile, ActorProfile]:
    """
    Register the active user model as Known and AnonymousUser as Unknown.

    Must run after the app registry is ready (AppConfig.ready()).
    Returns (known_profile, unknown_profile).
    """
    from django.contrib.auth import get_user_model
    from django.contrib.auth.models import AnonymousUser

    if config is None:
        config = config_from_settings()
    if registry is None:
        registry = default_registry

    known = configure(
        base=Known, overrides=known_overrides, config=config, actions=actions
    )
    unknown = configure(
        base=Unknown, overrides=unknown_overrides, config=config, actions=actions
    )

    registry.register(get_user_model(), known)
    registry.register(AnonymousUser, unknown)
    return known, unknown


class AppLabelKey:
    """
    Model mixin: key targets as <app_label>__<model_name>.

    Keeps shop.Item and blog.Item apart (shop__item, blog__item).

        class Item(AppLabelKey, models.Model):
            ...
    """

    @classmethod
    def permission_key(cls) -> str:
        return f"{cls._meta.app_label}::{cls.__name__}"
