"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from yard.domain.model.invitation import Invitation, PendingTimeLog
from yard.domain.value import (
    InvitationId,
    InvitationToken,
    PendingTimeLogId,
    ProfileId,
    TransactionId,
)


class InvitationRepository(ABC):
    """Repository for Invitation and its PendingTimeLog.

    The two records are created, cancelled and expired together.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find an invitation by token.

        Used when the invitee opens the invite link.

        Args:
            token: The invitation token

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_time_log(self, invitation_id: InvitationId) -> PendingTimeLog | None:
        """Find the time log attached to an invitation.

        Args:
            invitation_id: Owning invitation

        Returns:
            The pending time log if any
        """
        pass

    @abstractmethod
    async def create_with_time_log(
        self, invitation: Invitation, time_log: PendingTimeLog
    ) -> tuple[Invitation, PendingTimeLog]:
        """Insert an invitation and its time log atomically.

        Args:
            invitation: New invitation
            time_log: Time log referencing the invitation

        Returns:
            Both saved records

        Raises:
            StorageError: If either insert fails (neither is kept)
        """
        pass

    @abstractmethod
    async def mark_accepted(
        self, invitation_id: InvitationId, accepted_by: ProfileId, now: datetime
    ) -> bool:
        """Move an invitation from pending to accepted.

        Conditional on the stored status being pending and the invitation
        not having expired at ``now``.

        Args:
            invitation_id: Invitation to accept
            accepted_by: Profile accepting it
            now: Acceptance time

        Returns:
            True if this call performed the transition
        """
        pass

    @abstractmethod
    async def mark_time_log_converted(
        self, time_log_id: PendingTimeLogId, transaction_id: TransactionId, now: datetime
    ) -> bool:
        """Link a pending time log to the transaction created from it.

        Args:
            time_log_id: Time log to convert
            transaction_id: Transaction it became
            now: Conversion time

        Returns:
            True if the log was still pending and is now converted
        """
        pass

    @abstractmethod
    async def cancel(self, invitation_id: InvitationId, now: datetime) -> bool:
        """Cancel a pending invitation and its pending time log.

        Args:
            invitation_id: Invitation to cancel
            now: Cancellation time

        Returns:
            True if the invitation was pending and is now cancelled
        """
        pass

    @abstractmethod
    async def expire_stale(self, now: datetime) -> int:
        """Mark pending invitations past expiry, and their logs, expired.

        Args:
            now: Current time

        Returns:
            Number of invitations expired
        """
        pass
