"""Dispute transaction use case."""

from uuid import UUID

from pydantic import BaseModel

from yard.domain.service import TransactionService
from yard.domain.value import ProfileId, TransactionId

from .common import TransactionResponse


class DisputeTransactionRequest(BaseModel):
    """Dispute transaction request."""

    transaction_id: str
    actor_id: str
    reason: str


class DisputeTransactionUseCase:
    """Use case for a counterpart disputing a pending transaction."""

    def __init__(self, transaction_service: TransactionService) -> None:
        self.transaction_service = transaction_service

    async def execute(self, request: DisputeTransactionRequest) -> TransactionResponse:
        transaction = await self.transaction_service.dispute(
            TransactionId(UUID(request.transaction_id)),
            ProfileId(UUID(request.actor_id)),
            request.reason,
        )
        return TransactionResponse.from_domain(transaction)
