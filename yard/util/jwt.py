"""Session token verification.

Session tokens are minted by the external auth provider. The ledger only
verifies them and reads the stable user id (``sub``) out of the payload.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from yard.config import AuthSettings


class TokenPayload(BaseModel):
    """Verified session token payload."""

    user_id: str
    email: str | None = None
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str,
    email: str | None,
    settings: AuthSettings,
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    """Create a session token shaped like the auth provider's.

    Used by scripts and tests; production tokens come from the provider.

    Args:
        user_id: Auth provider user ID
        email: Email address on the account
        settings: Authentication settings
        expires_in: Token lifetime

    Returns:
        Encoded JWT token
    """
    payload = {
        "sub": user_id,
        "email": email,
        "aud": settings.jwt_audience,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a session token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    if not payload.get("sub"):
        raise JWTError("Token has no subject")

    return TokenPayload(
        user_id=payload["sub"],
        email=payload.get("email"),
        exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
