"""Invitation routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header

from yard.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CancelInvitationRequest,
    CancelInvitationResponse,
    CancelInvitationUseCase,
    GetInvitationRequest,
    GetInvitationResponse,
    GetInvitationUseCase,
)
from yard.application.usecase.profile import GetCurrentProfileUseCase
from yard.interface.api.auth import authenticate

router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)


@router.get("/{token}", response_model=GetInvitationResponse)
async def get_invitation(
    token: str,
    use_case: FromDishka[GetInvitationUseCase],
) -> GetInvitationResponse:
    """Invite landing page data. Public: the token is the credential."""
    return await use_case.execute(GetInvitationRequest(token=token))


@router.post("/{token}/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    token: str,
    use_case: FromDishka[AcceptInvitationUseCase],
    current_profile: FromDishka[GetCurrentProfileUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> AcceptInvitationResponse:
    actor = await authenticate(current_profile, authorization, auth_token)
    return await use_case.execute(
        AcceptInvitationRequest(token=token, actor_id=actor.profile_id)
    )


@router.delete("/{invitation_id}", response_model=CancelInvitationResponse)
async def cancel_invitation(
    invitation_id: str,
    use_case: FromDishka[CancelInvitationUseCase],
    current_profile: FromDishka[GetCurrentProfileUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> CancelInvitationResponse:
    actor = await authenticate(current_profile, authorization, auth_token)
    return await use_case.execute(
        CancelInvitationRequest(invitation_id=invitation_id, actor_id=actor.profile_id)
    )
