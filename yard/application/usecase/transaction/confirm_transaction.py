"""Confirm transaction use case."""

from uuid import UUID

from pydantic import BaseModel

from yard.domain.service import TransactionService
from yard.domain.value import ProfileId, TransactionId

from .common import TransactionResponse


class ConfirmTransactionRequest(BaseModel):
    """Confirm transaction request."""

    transaction_id: str
    actor_id: str


class ConfirmTransactionUseCase:
    """Use case for a counterpart confirming a pending transaction."""

    def __init__(self, transaction_service: TransactionService) -> None:
        self.transaction_service = transaction_service

    async def execute(self, request: ConfirmTransactionRequest) -> TransactionResponse:
        """Confirm the transaction and refresh both balances.

        Raises:
            NotFoundError: Unknown transaction
            ForbiddenError: Actor is the logger or not a party
            InvalidStateError: Transaction is no longer pending
        """
        transaction = await self.transaction_service.confirm(
            TransactionId(UUID(request.transaction_id)),
            ProfileId(UUID(request.actor_id)),
        )
        return TransactionResponse.from_domain(transaction)
