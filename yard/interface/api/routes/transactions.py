"""Time transaction routes."""

from decimal import Decimal

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from yard.application.usecase.profile import GetCurrentProfileUseCase
from yard.application.usecase.transaction import (
    CancelTransactionRequest,
    CancelTransactionUseCase,
    ConfirmTransactionRequest,
    ConfirmTransactionUseCase,
    DisputeTransactionRequest,
    DisputeTransactionUseCase,
    GetPendingTransactionsRequest,
    GetPendingTransactionsResponse,
    GetPendingTransactionsUseCase,
    LogTimeRequest,
    LogTimeResponse,
    LogTimeUseCase,
    NudgeTransactionRequest,
    NudgeTransactionResponse,
    NudgeTransactionUseCase,
    TransactionResponse,
)
from yard.domain.value import LogMode
from yard.interface.api.auth import authenticate

router = APIRouter(prefix="/transactions", tags=["transactions"], route_class=DishkaRoute)


class LogTimeAPIRequest(BaseModel):
    """API request for logging time with someone."""

    mode: LogMode
    contact: str = Field(description="Email of the person you helped or who helped you")
    name: str | None = None
    hours: Decimal
    description: str = ""
    service_type: str | None = None


class DisputeAPIRequest(BaseModel):
    """API request for disputing a transaction."""

    reason: str


@router.post("", response_model=LogTimeResponse, status_code=status.HTTP_201_CREATED)
async def log_time(
    request: LogTimeAPIRequest,
    log_time_use_case: FromDishka[LogTimeUseCase],
    current_profile: FromDishka[GetCurrentProfileUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> LogTimeResponse:
    """Log hours exchanged with a member or, failing that, invite them.

    Returns:
        Either the recorded transaction or the invitation holding the hours
    """
    actor = await authenticate(current_profile, authorization, auth_token)
    return await log_time_use_case.execute(
        LogTimeRequest(
            actor_id=actor.profile_id,
            mode=request.mode,
            counterpart_contact=request.contact,
            counterpart_name=request.name,
            hours=request.hours,
            description=request.description,
            service_type=request.service_type,
        )
    )


@router.get("/pending", response_model=GetPendingTransactionsResponse)
async def list_pending(
    use_case: FromDishka[GetPendingTransactionsUseCase],
    current_profile: FromDishka[GetCurrentProfileUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> GetPendingTransactionsResponse:
    actor = await authenticate(current_profile, authorization, auth_token)
    return await use_case.execute(GetPendingTransactionsRequest(profile_id=actor.profile_id))


@router.post("/{transaction_id}/confirm", response_model=TransactionResponse)
async def confirm_transaction(
    transaction_id: str,
    use_case: FromDishka[ConfirmTransactionUseCase],
    current_profile: FromDishka[GetCurrentProfileUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> TransactionResponse:
    actor = await authenticate(current_profile, authorization, auth_token)
    return await use_case.execute(
        ConfirmTransactionRequest(transaction_id=transaction_id, actor_id=actor.profile_id)
    )


@router.post("/{transaction_id}/dispute", response_model=TransactionResponse)
async def dispute_transaction(
    transaction_id: str,
    request: DisputeAPIRequest,
    use_case: FromDishka[DisputeTransactionUseCase],
    current_profile: FromDishka[GetCurrentProfileUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> TransactionResponse:
    actor = await authenticate(current_profile, authorization, auth_token)
    return await use_case.execute(
        DisputeTransactionRequest(
            transaction_id=transaction_id,
            actor_id=actor.profile_id,
            reason=request.reason,
        )
    )


@router.post("/{transaction_id}/cancel", response_model=TransactionResponse)
async def cancel_transaction(
    transaction_id: str,
    use_case: FromDishka[CancelTransactionUseCase],
    current_profile: FromDishka[GetCurrentProfileUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> TransactionResponse:
    actor = await authenticate(current_profile, authorization, auth_token)
    return await use_case.execute(
        CancelTransactionRequest(transaction_id=transaction_id, actor_id=actor.profile_id)
    )


@router.post("/{transaction_id}/nudge", response_model=NudgeTransactionResponse)
async def nudge_transaction(
    transaction_id: str,
    use_case: FromDishka[NudgeTransactionUseCase],
    current_profile: FromDishka[GetCurrentProfileUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> NudgeTransactionResponse:
    """Remind the counterpart about a pending transaction (at most hourly)."""
    actor = await authenticate(current_profile, authorization, auth_token)
    return await use_case.execute(
        NudgeTransactionRequest(transaction_id=transaction_id, actor_id=actor.profile_id)
    )
