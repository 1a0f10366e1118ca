"""Transaction state machine domain service."""

import logfire

from yard.domain.error import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from yard.domain.model.ledger import PendingTransactionView
from yard.domain.model.transaction import TimeTransaction
from yard.domain.repository import ProfileRepository, TransactionRepository
from yard.domain.value import ProfileId, TransactionId, TransactionStatus
from yard.util.clock import Clock

from .balance_service import BalanceService
from .base import Service
from .nudge_service import NudgeService


class TransactionService(Service):
    """Moves transactions out of ``pending``.

    pending -> confirmed | disputed (counterpart only)
    pending -> cancelled (either party)
    Terminal statuses never change.
    """

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        profile_repository: ProfileRepository,
        balance_service: BalanceService,
        nudge_service: NudgeService,
        clock: Clock,
    ) -> None:
        """Initialize transaction service.

        Args:
            transaction_repository: Transaction repository
            profile_repository: Profile repository
            balance_service: Balance projection, refreshed on confirmation
            nudge_service: Reminder throttle, for dashboard flags
            clock: Time source
        """
        self.transaction_repository = transaction_repository
        self.profile_repository = profile_repository
        self.balance_service = balance_service
        self.nudge_service = nudge_service
        self.clock = clock

    async def get(self, transaction_id: TransactionId) -> TimeTransaction:
        transaction = await self.transaction_repository.find_by_id(transaction_id)
        if transaction is None:
            logfire.warn("Transaction not found", transaction_id=str(transaction_id))
            raise NotFoundError("Transaction", str(transaction_id))
        return transaction

    async def _load_for_response(
        self, transaction_id: TransactionId, actor_id: ProfileId, action: str
    ) -> TimeTransaction:
        transaction = await self.get(transaction_id)

        if not transaction.is_participant(actor_id):
            raise ForbiddenError(
                action, "transaction", str(transaction_id), "you are not a party to it"
            )
        if transaction.logged_by == actor_id:
            logfire.warn(
                "Logger tried to respond to own transaction",
                transaction_id=str(transaction_id),
                action=action,
            )
            raise ForbiddenError(
                action, "transaction", str(transaction_id), "you logged it yourself"
            )
        if not transaction.is_pending:
            raise InvalidStateError(
                "Transaction", str(transaction_id), transaction.status.value
            )
        return transaction

    async def _apply(self, updated: TimeTransaction) -> TimeTransaction:
        applied = await self.transaction_repository.save_transition(updated)
        if not applied:
            current = await self.get(updated.id)
            logfire.warn(
                "Transaction changed concurrently",
                transaction_id=str(updated.id),
                status=current.status.value,
            )
            raise InvalidStateError("Transaction", str(updated.id), current.status.value)
        return updated

    async def confirm(
        self, transaction_id: TransactionId, actor_id: ProfileId
    ) -> TimeTransaction:
        """Confirm a pending transaction as its counterpart.

        Args:
            transaction_id: Transaction to confirm
            actor_id: Confirming profile

        Returns:
            The confirmed transaction

        Raises:
            NotFoundError: Unknown transaction
            ForbiddenError: Actor is the logger or not a party
            InvalidStateError: Transaction is no longer pending
        """
        with logfire.span(
            "transaction_service.confirm",
            transaction_id=str(transaction_id),
            actor_id=str(actor_id),
        ):
            transaction = await self._load_for_response(transaction_id, actor_id, "confirm")
            now = self.clock.now()
            confirmed = await self._apply(
                transaction.model_copy(
                    update={
                        "status": TransactionStatus.CONFIRMED,
                        "confirmed_at": now,
                        "confirmed_by": actor_id,
                        "updated_at": now,
                    }
                )
            )

            await self.balance_service.recompute(confirmed.giver_id)
            await self.balance_service.recompute(confirmed.receiver_id)

            logfire.info(
                "Transaction confirmed",
                transaction_id=str(transaction_id),
                hours=float(confirmed.hours),
            )
            return confirmed

    async def dispute(
        self, transaction_id: TransactionId, actor_id: ProfileId, reason: str
    ) -> TimeTransaction:
        """Dispute a pending transaction as its counterpart.

        Args:
            transaction_id: Transaction to dispute
            actor_id: Disputing profile
            reason: Why the claim is wrong, required

        Returns:
            The disputed transaction

        Raises:
            ValidationError: Reason is empty
            NotFoundError: Unknown transaction
            ForbiddenError: Actor is the logger or not a party
            InvalidStateError: Transaction is no longer pending
        """
        with logfire.span(
            "transaction_service.dispute",
            transaction_id=str(transaction_id),
            actor_id=str(actor_id),
        ):
            reason = (reason or "").strip()
            if not reason:
                raise ValidationError("Please give a reason for the dispute")

            transaction = await self._load_for_response(transaction_id, actor_id, "dispute")
            now = self.clock.now()
            disputed = await self._apply(
                transaction.model_copy(
                    update={
                        "status": TransactionStatus.DISPUTED,
                        "disputed_at": now,
                        "dispute_reason": reason,
                        "updated_at": now,
                    }
                )
            )
            logfire.info("Transaction disputed", transaction_id=str(transaction_id))
            return disputed

    async def cancel(
        self, transaction_id: TransactionId, actor_id: ProfileId
    ) -> TimeTransaction:
        """Withdraw a pending transaction; either party may do this.

        Raises:
            NotFoundError: Unknown transaction
            ForbiddenError: Actor is not a party
            InvalidStateError: Transaction is no longer pending
        """
        with logfire.span(
            "transaction_service.cancel",
            transaction_id=str(transaction_id),
            actor_id=str(actor_id),
        ):
            transaction = await self.get(transaction_id)
            if not transaction.is_participant(actor_id):
                raise ForbiddenError(
                    "cancel", "transaction", str(transaction_id), "you are not a party to it"
                )
            if not transaction.is_pending:
                raise InvalidStateError(
                    "Transaction", str(transaction_id), transaction.status.value
                )

            now = self.clock.now()
            cancelled = await self._apply(
                transaction.model_copy(
                    update={
                        "status": TransactionStatus.CANCELLED,
                        "cancelled_at": now,
                        "updated_at": now,
                    }
                )
            )
            logfire.info("Transaction cancelled", transaction_id=str(transaction_id))
            return cancelled

    async def list_pending_for_profile(
        self, profile_id: ProfileId
    ) -> list[PendingTransactionView]:
        """Pending transactions for a participant's dashboard.

        Args:
            profile_id: Viewing profile

        Returns:
            One row per pending transaction, newest first
        """
        with logfire.span(
            "transaction_service.list_pending_for_profile", profile_id=str(profile_id)
        ):
            transactions = await self.transaction_repository.list_pending_for_profile(
                profile_id
            )
            others = {t.counterpart_of(profile_id) for t in transactions}
            profiles = await self.profile_repository.find_by_ids(list(others))
            names = {p.id: p.name for p in profiles}

            views = []
            for t in transactions:
                other_id = t.counterpart_of(profile_id)
                is_logger = t.logged_by == profile_id
                views.append(
                    PendingTransactionView(
                        transaction_id=t.id,
                        other_party_id=other_id,
                        other_party_name=names.get(other_id, "Unknown member"),
                        hours=t.hours,
                        description=t.description,
                        service_type=t.service_type,
                        mode=t.mode_for(profile_id),
                        is_logger=is_logger,
                        can_confirm=not is_logger,
                        can_nudge=self.nudge_service.can_nudge(t, profile_id),
                        nudge_count=t.nudge_count,
                        last_nudged_at=t.last_nudged_at,
                        next_nudge_at=(
                            self.nudge_service.next_nudge_at(t) if is_logger else None
                        ),
                        created_at=t.created_at,
                    )
                )

            logfire.info(
                "Pending transactions listed", profile_id=str(profile_id), count=len(views)
            )
            return views
