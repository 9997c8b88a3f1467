"""
Explicit identity context.

Every messenger operation that acts "as" someone receives an
IdentityContext built from the authenticated session (request.user over
HTTP, scope["user"] over WebSocket). Nothing in the messenger reads a
global "current user".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class IdentityContext:
    """
    Who is making the call.

    Attributes:
        user_id: Authenticated user's id (None when anonymous)
        is_authenticated: Whether a valid session exists
        name: Display name, used in channel authorization payloads
    """

    user_id: Any = None
    is_authenticated: bool = False
    name: str = ""

    @classmethod
    def anonymous(cls) -> IdentityContext:
        return cls()

    @classmethod
    def from_user(cls, user) -> IdentityContext:
        """
        Build a context from a Django user (or AnonymousUser / None).

        Example:
            identity = IdentityContext.from_user(request.user)
        """
        if user is None or not getattr(user, "is_authenticated", False):
            return cls.anonymous()
        name = getattr(user, "name", "") or user.get_username()
        return cls(user_id=user.pk, is_authenticated=True, name=name)

    def is_user(self, user_id) -> bool:
        """True when authenticated as exactly user_id."""
        if not self.is_authenticated or self.user_id is None:
            return False
        return str(self.user_id) == str(user_id)
