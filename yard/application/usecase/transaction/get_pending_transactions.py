"""Get pending transactions use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from yard.domain.service import TransactionService
from yard.domain.value import LogMode, ProfileId


class GetPendingTransactionsRequest(BaseModel):
    """Get pending transactions request."""

    profile_id: str


class PendingTransactionItem(BaseModel):
    """Pending transaction row."""

    transaction_id: str
    other_party_id: str
    other_party_name: str
    hours: float
    description: str
    service_type: str
    mode: LogMode
    is_logger: bool
    can_confirm: bool
    can_nudge: bool
    nudge_count: int
    last_nudged_at: datetime | None
    next_nudge_at: datetime | None
    created_at: datetime


class GetPendingTransactionsResponse(BaseModel):
    """Get pending transactions response."""

    transactions: list[PendingTransactionItem]


class GetPendingTransactionsUseCase:
    """Use case for the pending-transactions dashboard."""

    def __init__(self, transaction_service: TransactionService) -> None:
        self.transaction_service = transaction_service

    async def execute(
        self, request: GetPendingTransactionsRequest
    ) -> GetPendingTransactionsResponse:
        views = await self.transaction_service.list_pending_for_profile(
            ProfileId(UUID(request.profile_id))
        )
        return GetPendingTransactionsResponse(
            transactions=[
                PendingTransactionItem(
                    transaction_id=str(v.transaction_id),
                    other_party_id=str(v.other_party_id),
                    other_party_name=v.other_party_name,
                    hours=float(v.hours),
                    description=v.description,
                    service_type=v.service_type,
                    mode=v.mode,
                    is_logger=v.is_logger,
                    can_confirm=v.can_confirm,
                    can_nudge=v.can_nudge,
                    nudge_count=v.nudge_count,
                    last_nudged_at=v.last_nudged_at,
                    next_nudge_at=v.next_nudge_at,
                    created_at=v.created_at,
                )
                for v in views
            ]
        )
