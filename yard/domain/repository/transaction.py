"""Time transaction repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal

from yard.domain.model.transaction import TimeTransaction
from yard.domain.value import ProfileId, TransactionId


class TransactionRepository(ABC):
    """Repository for TimeTransaction entity.

    Status changes and nudges are conditional writes: they report whether
    a row was affected instead of overwriting a concurrent change.
    """

    @abstractmethod
    async def find_by_id(self, transaction_id: TransactionId) -> TimeTransaction | None:
        """Find a transaction by ID.

        Args:
            transaction_id: The transaction's unique identifier

        Returns:
            The transaction if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, transaction: TimeTransaction) -> TimeTransaction:
        """Insert a new transaction.

        Args:
            transaction: The transaction to insert

        Returns:
            The inserted transaction

        Raises:
            StorageError: If the insert fails
        """
        pass

    @abstractmethod
    async def save_transition(self, transaction: TimeTransaction) -> bool:
        """Persist a status change out of ``pending``.

        Writes the status and its confirmation/dispute/cancellation fields
        only if the stored row is still pending.

        Args:
            transaction: The transaction carrying its new status

        Returns:
            True if the row was still pending and is now updated
        """
        pass

    @abstractmethod
    async def record_nudge(
        self,
        transaction_id: TransactionId,
        previous_nudged_at: datetime | None,
        nudged_at: datetime,
    ) -> bool:
        """Record a reminder send.

        Only applies if the transaction is pending and its ``last_nudged_at``
        still equals ``previous_nudged_at``. Increments ``nudge_count``.

        Args:
            transaction_id: Transaction being nudged
            previous_nudged_at: Value read before the throttle check
            nudged_at: New reminder timestamp

        Returns:
            True if the reminder was recorded
        """
        pass

    @abstractmethod
    async def list_pending_for_profile(
        self, profile_id: ProfileId
    ) -> list[TimeTransaction]:
        """List pending transactions the profile is party to, newest first.

        Args:
            profile_id: Participant profile ID

        Returns:
            Pending transactions
        """
        pass

    @abstractmethod
    async def sum_confirmed_hours(self, profile_id: ProfileId) -> tuple[Decimal, Decimal]:
        """Total confirmed hours given and received by a profile.

        Args:
            profile_id: Profile ID

        Returns:
            ``(hours_given, hours_received)``
        """
        pass
