"""Profile routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status

from yard.application.usecase.profile import (
    ConfirmAccountRequest,
    ConfirmAccountResponse,
    ConfirmAccountUseCase,
    GetBalanceRequest,
    GetBalanceResponse,
    GetBalanceUseCase,
    GetCurrentProfileResponse,
    GetCurrentProfileUseCase,
    StagePendingProfileRequest,
    StagePendingProfileResponse,
    StagePendingProfileUseCase,
)
from yard.interface.api.auth import authenticate, extract_token

router = APIRouter(prefix="/profiles", tags=["profiles"], route_class=DishkaRoute)


@router.post(
    "/pending",
    response_model=StagePendingProfileResponse,
    status_code=status.HTTP_201_CREATED,
)
async def stage_pending_profile(
    request: StagePendingProfileRequest,
    use_case: FromDishka[StagePendingProfileUseCase],
) -> StagePendingProfileResponse:
    """Hold sign-up details until the account's email is confirmed."""
    return await use_case.execute(request)


@router.post("/confirm", response_model=ConfirmAccountResponse)
async def confirm_account(
    use_case: FromDishka[ConfirmAccountUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ConfirmAccountResponse:
    """Create the caller's profile from staged sign-up data.

    Any time logged during sign-up is recorded too; if that fails the
    profile still exists and the error is reported in the response.
    """
    token = extract_token(authorization, auth_token)
    return await use_case.execute(ConfirmAccountRequest(token=token))


@router.get("/me", response_model=GetCurrentProfileResponse)
async def get_me(
    current_profile: FromDishka[GetCurrentProfileUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> GetCurrentProfileResponse:
    return await authenticate(current_profile, authorization, auth_token)


@router.get("/me/balance", response_model=GetBalanceResponse)
async def get_my_balance(
    use_case: FromDishka[GetBalanceUseCase],
    current_profile: FromDishka[GetCurrentProfileUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> GetBalanceResponse:
    actor = await authenticate(current_profile, authorization, auth_token)
    return await use_case.execute(GetBalanceRequest(profile_id=actor.profile_id))
