"""Nudge transaction use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from yard.domain.repository import UnitOfWork
from yard.domain.service import NotificationService, NudgeService, ProfileService
from yard.domain.value import ProfileId, TransactionId


class NudgeTransactionRequest(BaseModel):
    """Nudge transaction request."""

    transaction_id: str
    actor_id: str


class NudgeTransactionResponse(BaseModel):
    """Nudge transaction response."""

    transaction_id: str
    nudge_count: int
    last_nudged_at: datetime
    next_nudge_at: datetime
    notification_sent: bool


class NudgeTransactionUseCase:
    """Use case for reminding a counterpart about a pending transaction."""

    def __init__(
        self,
        nudge_service: NudgeService,
        profile_service: ProfileService,
        notification_service: NotificationService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize nudge use case.

        Args:
            nudge_service: Reminder throttle
            profile_service: Profile domain service
            notification_service: Notification dispatch
            unit_of_work: Storage transaction boundary
        """
        self.nudge_service = nudge_service
        self.profile_service = profile_service
        self.notification_service = notification_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: NudgeTransactionRequest) -> NudgeTransactionResponse:
        """Record the nudge, commit, then send the reminder.

        Raises:
            NotFoundError: Unknown transaction
            ForbiddenError: Actor did not log the transaction
            InvalidStateError: Transaction is no longer pending
            RateLimitedError: Too soon since the last reminder
        """
        with logfire.span("nudge_transaction.execute", transaction_id=request.transaction_id):
            actor_id = ProfileId(UUID(request.actor_id))
            transaction = await self.nudge_service.nudge(
                TransactionId(UUID(request.transaction_id)), actor_id
            )
            await self.unit_of_work.commit()

            logger = await self.profile_service.get_by_id(actor_id)
            counterpart = await self.profile_service.get_by_id(
                transaction.counterpart_of(actor_id)
            )
            outcome = await self.notification_service.send_reminder(
                recipient_email=str(counterpart.email),
                recipient_name=counterpart.name,
                logger_name=logger.name,
                hours=transaction.hours,
                description=transaction.description,
                nudge_count=transaction.nudge_count,
            )

            nudged_at = transaction.last_nudged_at or transaction.updated_at
            return NudgeTransactionResponse(
                transaction_id=str(transaction.id),
                nudge_count=transaction.nudge_count,
                last_nudged_at=nudged_at,
                next_nudge_at=nudged_at + self.nudge_service.interval,
                notification_sent=outcome.success,
            )
