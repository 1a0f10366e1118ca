"""Cancel invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from yard.domain.service import InvitationService
from yard.domain.value import InvitationId, ProfileId


class CancelInvitationRequest(BaseModel):
    """Cancel invitation request."""

    invitation_id: str
    actor_id: str


class CancelInvitationResponse(BaseModel):
    """Cancel invitation response."""

    invitation_id: str
    cancelled: bool


class CancelInvitationUseCase:
    """Use case for an inviter withdrawing an invitation and its time log."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: CancelInvitationRequest) -> CancelInvitationResponse:
        await self.invitation_service.cancel(
            InvitationId(UUID(request.invitation_id)),
            ProfileId(UUID(request.actor_id)),
        )
        return CancelInvitationResponse(invitation_id=request.invitation_id, cancelled=True)
