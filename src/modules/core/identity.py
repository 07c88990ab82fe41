"""Current-actor resolution used to stamp audit fields."""

from __future__ import annotations

from typing import Any, Optional

SYSTEM_ACTOR = "System"


def current_actor(user: Optional[Any]) -> str:
    """Return an identifier for *user*, or ``"System"`` when there is none.

    Works with Django users (``email`` then ``username``) and with
    ``Auth0User`` principals (``email`` claim then ``sub``).
    """
    if user is None or not getattr(user, "is_authenticated", False):
        return SYSTEM_ACTOR
    for attr in ("email", "username", "sub"):
        value = getattr(user, attr, "")
        if value:
            return str(value)
    return SYSTEM_ACTOR
