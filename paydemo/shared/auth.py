"""Read and write the authenticated user ID on a request context."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

__all__ = ["user_id_from_context", "with_user_id"]

# A tuple key cannot collide with the plain string keys other code uses.
_USER_ID_KEY = ("paydemo.auth", "user_id")


def user_id_from_context(context: Mapping[Any, Any] | None) -> str | None:
    """Return the authenticated user ID, or None if the context carries none."""
    if not context:
        return None
    value = context.get(_USER_ID_KEY)
    return value if isinstance(value, str) else None


def with_user_id(context: Mapping[Any, Any] | None, user_id: str) -> dict[Any, Any]:
    """Return a new context holding ``user_id``; the original is left untouched."""
    new_context = dict(context or {})
    new_context[_USER_ID_KEY] = user_id
    return new_context