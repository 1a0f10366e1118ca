"""Session token domain service."""

from uuid import UUID

import logfire

from yard.config import AuthSettings
from yard.util.jwt import JWTError, TokenPayload, verify_token

from .base import Service


class SessionService(Service):
    """Verifies session tokens issued by the auth provider."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def verify(self, token: str) -> TokenPayload:
        """Verify a session token and extract its payload.

        Args:
            token: JWT from the Authorization header or cookie

        Returns:
            Token payload

        Raises:
            JWTError: If the token is invalid, expired or has a bad subject
        """
        with logfire.span("session_service.verify"):
            try:
                payload = verify_token(token, self.auth_settings)
                UUID(payload.user_id)
            except JWTError as e:
                logfire.warn("Session token rejected", error=str(e))
                raise
            except ValueError:
                logfire.warn("Session token subject is not a UUID")
                raise JWTError("Invalid token subject")

            logfire.info("Session token verified", user_id=payload.user_id)
            return payload
