"""Shared response shape for transaction use cases."""

from datetime import datetime

from pydantic import BaseModel

from yard.domain.model.transaction import TimeTransaction
from yard.domain.value import TransactionStatus


class TransactionResponse(BaseModel):
    """Transaction as returned by the API."""

    transaction_id: str
    giver_id: str
    receiver_id: str
    logged_by: str
    hours: float
    description: str
    service_type: str
    status: TransactionStatus
    confirmed_at: datetime | None = None
    disputed_at: datetime | None = None
    dispute_reason: str | None = None
    cancelled_at: datetime | None = None
    nudge_count: int = 0
    last_nudged_at: datetime | None = None
    created_at: datetime

    @classmethod
    def from_domain(cls, transaction: TimeTransaction) -> "TransactionResponse":
        return cls(
            transaction_id=str(transaction.id),
            giver_id=str(transaction.giver_id),
            receiver_id=str(transaction.receiver_id),
            logged_by=str(transaction.logged_by),
            hours=float(transaction.hours),
            description=transaction.description,
            service_type=transaction.service_type,
            status=transaction.status,
            confirmed_at=transaction.confirmed_at,
            disputed_at=transaction.disputed_at,
            dispute_reason=transaction.dispute_reason,
            cancelled_at=transaction.cancelled_at,
            nudge_count=transaction.nudge_count,
            last_nudged_at=transaction.last_nudged_at,
            created_at=transaction.created_at,
        )
