"""Get current profile use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from yard.domain.error import NotFoundError
from yard.domain.service import ProfileService, SessionService
from yard.domain.value import UserId


class GetCurrentProfileRequest(BaseModel):
    """Get current profile request."""

    token: str  # Session JWT


class GetCurrentProfileResponse(BaseModel):
    """Get current profile response."""

    profile_id: str
    user_id: str
    email: str
    name: str
    full_name: str | None
    display_name: str | None
    bio: str | None
    location: str | None
    time_balance_hours: float
    created_at: datetime


class GetCurrentProfileUseCase:
    """Use case for resolving the authenticated member's profile."""

    def __init__(
        self, session_service: SessionService, profile_service: ProfileService
    ) -> None:
        """Initialize get current profile use case.

        Args:
            session_service: Session token verification
            profile_service: Profile domain service
        """
        self.session_service = session_service
        self.profile_service = profile_service

    async def execute(self, request: GetCurrentProfileRequest) -> GetCurrentProfileResponse:
        """Verify the session and load its profile.

        Raises:
            JWTError: If the token is invalid or expired
            NotFoundError: If the account has no profile yet
        """
        payload = self.session_service.verify(request.token)
        profile = await self.profile_service.get_by_user_id(UserId(UUID(payload.user_id)))
        if profile is None:
            raise NotFoundError("Profile", payload.user_id)

        return GetCurrentProfileResponse(
            profile_id=str(profile.id),
            user_id=str(profile.user_id),
            email=str(profile.email),
            name=profile.name,
            full_name=profile.full_name,
            display_name=profile.display_name,
            bio=profile.bio,
            location=profile.location,
            time_balance_hours=float(profile.time_balance_hours),
            created_at=profile.created_at,
        )
