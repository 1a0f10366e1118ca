"""Balance projection domain service."""

from decimal import Decimal

import logfire

from yard.domain.model.ledger import ProfileBalance
from yard.domain.repository import ProfileRepository, TransactionRepository
from yard.domain.value import ProfileId
from yard.util.clock import Clock

from .base import Service


class BalanceService(Service):
    """Derives time balances from confirmed transactions."""

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        profile_repository: ProfileRepository,
        clock: Clock,
    ) -> None:
        self.transaction_repository = transaction_repository
        self.profile_repository = profile_repository
        self.clock = clock

    async def get_balance(self, profile_id: ProfileId) -> ProfileBalance:
        """Sum confirmed hours given and received by a profile.

        Args:
            profile_id: Profile ID

        Returns:
            Balance projection computed from the ledger
        """
        with logfire.span("balance_service.get_balance", profile_id=str(profile_id)):
            given, received = await self.transaction_repository.sum_confirmed_hours(
                profile_id
            )
            return ProfileBalance(
                profile_id=profile_id, hours_given=given, hours_received=received
            )

    async def recompute(self, profile_id: ProfileId) -> Decimal:
        """Refresh the cached balance on the profile from the ledger.

        Args:
            profile_id: Profile ID

        Returns:
            The new balance, zero if the profile does not exist
        """
        with logfire.span("balance_service.recompute", profile_id=str(profile_id)):
            balance = await self.profile_repository.refresh_balance(
                profile_id, self.clock.now()
            )
            if balance is None:
                logfire.warn(
                    "Balance not recomputed, profile missing", profile_id=str(profile_id)
                )
                return Decimal("0")
            logfire.info(
                "Balance recomputed", profile_id=str(profile_id), balance=float(balance)
            )
            return balance
