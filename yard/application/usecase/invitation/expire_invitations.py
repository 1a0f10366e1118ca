"""Expire invitations use case."""

from pydantic import BaseModel

from yard.domain.service import InvitationService, ProfileService


class ExpireInvitationsResponse(BaseModel):
    """Housekeeping summary."""

    invitations_expired: int
    pending_profiles_removed: int


class ExpireInvitationsUseCase:
    """Housekeeping: expire stale invitations and drop stale sign-up data.

    Expiry is enforced on read regardless; this only brings stored
    statuses in line.
    """

    def __init__(
        self, invitation_service: InvitationService, profile_service: ProfileService
    ) -> None:
        self.invitation_service = invitation_service
        self.profile_service = profile_service

    async def execute(self) -> ExpireInvitationsResponse:
        expired = await self.invitation_service.expire_stale()
        removed = await self.profile_service.purge_expired_pending()
        return ExpireInvitationsResponse(
            invitations_expired=expired, pending_profiles_removed=removed
        )
