"""Stage pending profile use case."""

from datetime import datetime

from pydantic import BaseModel

from yard.domain.model.profile import ProfileLink, TimeLoggingData
from yard.domain.service import ProfileService
from yard.domain.value import Email


class StagePendingProfileRequest(BaseModel):
    """Sign-up submission."""

    email: str
    full_name: str | None = None
    display_name: str | None = None
    bio: str | None = None
    location: str | None = None
    urls: list[ProfileLink] = []
    time_logging_data: TimeLoggingData | None = None


class StagePendingProfileResponse(BaseModel):
    """Stage pending profile response."""

    email: str
    expires_at: datetime
    has_time_log: bool


class StagePendingProfileUseCase:
    """Use case for holding sign-up data until the account is confirmed."""

    def __init__(self, profile_service: ProfileService) -> None:
        self.profile_service = profile_service

    async def execute(
        self, request: StagePendingProfileRequest
    ) -> StagePendingProfileResponse:
        """Stage the submission, replacing any earlier one for the email.

        Raises:
            pydantic.ValidationError: If the email is malformed
        """
        pending = await self.profile_service.stage_pending_profile(
            email=Email(request.email),
            full_name=request.full_name,
            display_name=request.display_name,
            bio=request.bio,
            location=request.location,
            urls=request.urls,
            time_logging_data=request.time_logging_data,
        )
        return StagePendingProfileResponse(
            email=str(pending.email),
            expires_at=pending.expires_at,
            has_time_log=pending.time_logging_data is not None,
        )
