"""Session identity and the token provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass(frozen=True)
class TokenUser:
    """The caller a valid session token identifies.

    ``name`` is the display name at the time the token was issued; handlers
    that need the current name load the user record instead.
    """

    id: UUID
    email: str
    name: Optional[str] = None


class IAuthProvider(Protocol):
    """Issues and checks the session tokens sent in the auth header."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Return the token's identity, or None for a bad or expired token."""
        ...

    def create_token(self, user: TokenUser) -> str:
        """Sign a new session token for ``user``."""
        ...
