"""Get invitation use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from yard.domain.service import InvitationService
from yard.domain.value import LogMode


class GetInvitationRequest(BaseModel):
    """Get invitation request."""

    token: str


class InvitationTimeLog(BaseModel):
    """Time log the invitee is asked to confirm."""

    hours: float
    description: str
    mode: LogMode  # from the inviter's side


class GetInvitationResponse(BaseModel):
    """Get invitation response. Carries no authentication data."""

    invitation_id: str
    email: str
    full_name: str | None
    inviter_name: str
    expires_at: datetime
    time_log: InvitationTimeLog | None


class GetInvitationUseCase:
    """Use case for showing an invitation on the invite landing page."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize get invitation use case.

        Args:
            invitation_service: Invitation lifecycle service
        """
        self.invitation_service = invitation_service

    async def execute(self, request: GetInvitationRequest) -> GetInvitationResponse:
        """Validate the token and describe the invitation.

        Raises:
            NotFoundError: Unknown token
            ExpiredError: Invitation past expiry
            AlreadyUsedError: Invitation accepted or cancelled
        """
        with logfire.span("get_invitation.execute", token=request.token[:8] + "..."):
            details = await self.invitation_service.get_by_token(request.token)
            return GetInvitationResponse(
                invitation_id=str(details.invitation_id),
                email=str(details.email),
                full_name=details.full_name,
                inviter_name=details.inviter_name,
                expires_at=details.expires_at,
                time_log=(
                    InvitationTimeLog(
                        hours=float(details.time_log.hours),
                        description=details.time_log.description,
                        mode=details.time_log.mode,
                    )
                    if details.time_log
                    else None
                ),
            )
