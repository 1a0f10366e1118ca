"""Get balance use case."""

from uuid import UUID

from pydantic import BaseModel

from yard.domain.service import BalanceService
from yard.domain.value import ProfileId


class GetBalanceRequest(BaseModel):
    """Get balance request."""

    profile_id: str


class GetBalanceResponse(BaseModel):
    """Get balance response."""

    profile_id: str
    hours_given: float
    hours_received: float
    balance: float


class GetBalanceUseCase:
    """Use case for a member's confirmed time balance."""

    def __init__(self, balance_service: BalanceService) -> None:
        self.balance_service = balance_service

    async def execute(self, request: GetBalanceRequest) -> GetBalanceResponse:
        projection = await self.balance_service.get_balance(
            ProfileId(UUID(request.profile_id))
        )
        return GetBalanceResponse(
            profile_id=request.profile_id,
            hours_given=float(projection.hours_given),
            hours_received=float(projection.hours_received),
            balance=float(projection.balance),
        )
