"""Accept invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from yard.domain.repository import UnitOfWork
from yard.domain.service import InvitationService, ProfileService
from yard.domain.value import ProfileId


class AcceptInvitationRequest(BaseModel):
    """Accept invitation request."""

    token: str
    actor_id: str  # Profile ID of the newly signed-up invitee


class AcceptInvitationResponse(BaseModel):
    """Accept invitation response."""

    invitation_id: str
    transaction_created: bool
    transaction_id: str | None = None
    already_accepted: bool = False


class AcceptInvitationUseCase:
    """Use case for an invitee accepting their invitation after sign-up."""

    def __init__(
        self,
        invitation_service: InvitationService,
        profile_service: ProfileService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize accept invitation use case.

        Args:
            invitation_service: Invitation lifecycle service
            profile_service: Profile domain service
            unit_of_work: Storage transaction boundary
        """
        self.invitation_service = invitation_service
        self.profile_service = profile_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: AcceptInvitationRequest) -> AcceptInvitationResponse:
        """Accept the invitation and convert its time log.

        Raises:
            NotFoundError: Unknown token or profile
            ExpiredError: Invitation past expiry
            AlreadyUsedError: Invitation used by someone else or cancelled
            ForbiddenError: Inviter accepting their own invitation
        """
        with logfire.span("accept_invitation.execute", actor_id=request.actor_id):
            profile = await self.profile_service.get_by_id(ProfileId(UUID(request.actor_id)))
            result = await self.invitation_service.accept(request.token, profile)
            await self.unit_of_work.commit()

            return AcceptInvitationResponse(
                invitation_id=str(result.invitation_id),
                transaction_created=result.transaction_created,
                transaction_id=str(result.transaction_id) if result.transaction_id else None,
                already_accepted=result.already_accepted,
            )
