"""Domain layer DI providers."""

from dishka import Scope, provide

from yard.config import (
    APISettings,
    AuthSettings,
    LedgerSettings,
    NotificationSettings,
)
from yard.domain.repository import (
    InvitationRepository,
    PendingProfileRepository,
    ProfileRepository,
    TransactionRepository,
    TransactionSource,
    UnitOfWork,
)
from yard.domain.service import (
    BalanceService,
    ContactResolver,
    FeedService,
    InvitationService,
    LedgerService,
    NotificationClient,
    NotificationService,
    NudgeService,
    ProfileService,
    SessionService,
    TransactionService,
)
from yard.domain.value import TransactionKind
from yard.util.clock import Clock
from yard.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_session_service(self, auth_settings: AuthSettings) -> SessionService:
        return SessionService(auth_settings=auth_settings)

    @provide
    def get_contact_resolver(self, profile_repository: ProfileRepository) -> ContactResolver:
        return ContactResolver(profile_repository=profile_repository)

    @provide
    def get_profile_service(
        self,
        profile_repository: ProfileRepository,
        pending_profile_repository: PendingProfileRepository,
        clock: Clock,
        ledger_settings: LedgerSettings,
    ) -> ProfileService:
        return ProfileService(
            profile_repository=profile_repository,
            pending_profile_repository=pending_profile_repository,
            clock=clock,
            ledger_settings=ledger_settings,
        )

    @provide
    def get_balance_service(
        self,
        transaction_repository: TransactionRepository,
        profile_repository: ProfileRepository,
        clock: Clock,
    ) -> BalanceService:
        return BalanceService(
            transaction_repository=transaction_repository,
            profile_repository=profile_repository,
            clock=clock,
        )

    @provide
    def get_nudge_service(
        self,
        transaction_repository: TransactionRepository,
        clock: Clock,
        ledger_settings: LedgerSettings,
    ) -> NudgeService:
        return NudgeService(
            transaction_repository=transaction_repository,
            clock=clock,
            ledger_settings=ledger_settings,
        )

    @provide
    def get_transaction_service(
        self,
        transaction_repository: TransactionRepository,
        profile_repository: ProfileRepository,
        balance_service: BalanceService,
        nudge_service: NudgeService,
        clock: Clock,
    ) -> TransactionService:
        return TransactionService(
            transaction_repository=transaction_repository,
            profile_repository=profile_repository,
            balance_service=balance_service,
            nudge_service=nudge_service,
            clock=clock,
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        transaction_repository: TransactionRepository,
        profile_repository: ProfileRepository,
        unit_of_work: UnitOfWork,
        clock: Clock,
        ledger_settings: LedgerSettings,
        api_settings: APISettings,
    ) -> InvitationService:
        return InvitationService(
            invitation_repository=invitation_repository,
            transaction_repository=transaction_repository,
            profile_repository=profile_repository,
            unit_of_work=unit_of_work,
            clock=clock,
            ledger_settings=ledger_settings,
            api_settings=api_settings,
        )

    @provide
    def get_ledger_service(
        self,
        contact_resolver: ContactResolver,
        transaction_repository: TransactionRepository,
        invitation_service: InvitationService,
        clock: Clock,
        ledger_settings: LedgerSettings,
    ) -> LedgerService:
        return LedgerService(
            contact_resolver=contact_resolver,
            transaction_repository=transaction_repository,
            invitation_service=invitation_service,
            clock=clock,
            ledger_settings=ledger_settings,
        )

    @provide
    def get_feed_service(
        self,
        sources: dict[TransactionKind, TransactionSource],
        ledger_settings: LedgerSettings,
    ) -> FeedService:
        """Provide feed service over every configured transaction source."""
        return FeedService(sources=sources, ledger_settings=ledger_settings)

    @provide
    def get_notification_service(
        self,
        client: NotificationClient,
        notification_settings: NotificationSettings,
    ) -> NotificationService:
        return NotificationService(
            client=client, notification_settings=notification_settings
        )
