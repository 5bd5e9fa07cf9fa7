"""
can_self_do_it — Target Type Keys
=================================
Turns a target's runtime type into the flat key used in handler names.

Rules:
- Namespace separators ("::" or ".") become "__"
- Camel-case words inside a segment are joined with "_"
- Runs of "_" inside a segment collapse, so a segment can never
  produce the namespace separator on its own
- Anything up to a "<locals>" marker is dropped (classes defined
  inside functions keep only their own name)

    normalize("Post")         -> "post"
    normalize("PostComment")  -> "post_comment"
    normalize("Shop::Item")   -> "shop__item"

By default a class is keyed by its __qualname__ only, so same-named
classes from different modules share a key. A class that needs its own
namespace sets `permission_key`, either a type name string or a
classmethod returning one; it is normalized like any other name and is
inherited by subclasses. contrib.django.AppLabelKey derives it from a
model's app label.
"""

from __future__ import annotations

import re
from functools import lru_cache

from django.utils.text import camel_case_to_spaces

NAMESPACE_SEPARATOR = "__"
LOCALS_MARKER = "<locals>"

_NAMESPACE_RE = re.compile(r"::|\.")
_WORD_GAP_RE = re.compile(r"[\s_]+")
_TYPE_KEY_RE = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*(?:__[a-z0-9]+(?:_[a-z0-9]+)*)*$")

KEY_ATTRIBUTE = "permission_key"


def normalize(type_name: str) -> str:
    """Normalize a (possibly namespaced) type name into a lookup key."""
    if not isinstance(type_name, str) or not type_name.strip():
        raise ValueError("type_name must be a non-empty string.")

    segments = _NAMESPACE_RE.split(type_name.strip())
    if LOCALS_MARKER in segments:
        last = len(segments) - 1 - segments[::-1].index(LOCALS_MARKER)
        segments = segments[last + 1:]

    keys = []
    for segment in segments:
        key = _WORD_GAP_RE.sub("_", camel_case_to_spaces(segment)).strip("_")
        if not key:
            raise ValueError(
                f"Type name '{type_name}' contains an empty segment."
            )
        keys.append(key)

    return NAMESPACE_SEPARATOR.join(keys)


def as_type_key(value: str) -> str:
    """Keep an already-normalized key as is, otherwise normalize it."""
    if isinstance(value, str) and _TYPE_KEY_RE.match(value):
        return value
    return normalize(value)


@lru_cache(maxsize=None)
def _key_for_class(cls: type) -> str:
    explicit = getattr(cls, KEY_ATTRIBUTE, None)
    if callable(explicit):
        explicit = explicit()
    if explicit is None:
        return normalize(cls.__qualname__)
    return as_type_key(explicit)


def type_key_for(target) -> str:
    """
    Type key for a permission target.

    A class is keyed by itself, so create checks can be asked
    before an instance exists.
    """
    cls = target if isinstance(target, type) else type(target)
    return _key_for_class(cls)
