"""Session authentication for API routes."""

from yard.application.usecase.profile import (
    GetCurrentProfileRequest,
    GetCurrentProfileResponse,
    GetCurrentProfileUseCase,
)
from yard.interface.error import AuthenticationError


def extract_token(authorization: str | None, auth_token: str | None) -> str:
    """Pick the session token from the Authorization header or the cookie.

    Raises:
        AuthenticationError: Neither carries a token
    """
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    if auth_token:
        return auth_token
    raise AuthenticationError("Not authenticated")


async def authenticate(
    use_case: GetCurrentProfileUseCase,
    authorization: str | None,
    auth_token: str | None,
) -> GetCurrentProfileResponse:
    """Resolve the request's session to the caller's profile.

    Raises:
        AuthenticationError: No token supplied
        JWTError: Token invalid or expired
        NotFoundError: Account has no profile yet
    """
    token = extract_token(authorization, auth_token)
    return await use_case.execute(GetCurrentProfileRequest(token=token))
