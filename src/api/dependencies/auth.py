"""The session token gate.

Protected routes declare ``user: CurrentUser``; the token is read from the
``x-auth-token`` header (name configurable) rather than a bearer header.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyHeader

from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

session_token = APIKeyHeader(
    name=settings.auth_header_name,
    auto_error=False,
    description="Session token returned by registration or login",
)

_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_current_user(
    token: Annotated[str | None, Depends(session_token)],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Resolve the caller from the session token.

    Raises:
        AuthenticationError: "No token, authorization denied" when the header
            is missing or empty, "Token is not valid" when it does not verify
    """
    if not token:
        raise AuthenticationError()

    user = await auth_provider.validate_token(token)
    if user is None:
        raise AuthenticationError(
            message="Token is not valid",
            error_code=ErrorCode.INVALID_TOKEN,
        )
    return user


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
