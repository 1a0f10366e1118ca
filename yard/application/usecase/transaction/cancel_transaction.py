"""Cancel transaction use case."""

from uuid import UUID

from pydantic import BaseModel

from yard.domain.service import TransactionService
from yard.domain.value import ProfileId, TransactionId

from .common import TransactionResponse


class CancelTransactionRequest(BaseModel):
    """Cancel transaction request."""

    transaction_id: str
    actor_id: str


class CancelTransactionUseCase:
    """Use case for withdrawing a pending transaction ("skip for now")."""

    def __init__(self, transaction_service: TransactionService) -> None:
        self.transaction_service = transaction_service

    async def execute(self, request: CancelTransactionRequest) -> TransactionResponse:
        transaction = await self.transaction_service.cancel(
            TransactionId(UUID(request.transaction_id)),
            ProfileId(UUID(request.actor_id)),
        )
        return TransactionResponse.from_domain(transaction)
