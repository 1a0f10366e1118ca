"""Application layer DI providers."""

from dishka import Scope, provide

from yard.application.usecase.feed import LoadFeedUseCase
from yard.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CancelInvitationUseCase,
    ExpireInvitationsUseCase,
    GetInvitationUseCase,
)
from yard.application.usecase.profile import (
    ConfirmAccountUseCase,
    GetBalanceUseCase,
    GetCurrentProfileUseCase,
    StagePendingProfileUseCase,
)
from yard.application.usecase.transaction import (
    CancelTransactionUseCase,
    ConfirmTransactionUseCase,
    DisputeTransactionUseCase,
    GetPendingTransactionsUseCase,
    LogTimeUseCase,
    NudgeTransactionUseCase,
)
from yard.domain.repository import UnitOfWork
from yard.domain.service import (
    BalanceService,
    FeedService,
    InvitationService,
    LedgerService,
    NotificationService,
    NudgeService,
    ProfileService,
    SessionService,
    TransactionService,
)
from yard.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_log_time_use_case(
        self,
        ledger_service: LedgerService,
        profile_service: ProfileService,
        notification_service: NotificationService,
        unit_of_work: UnitOfWork,
    ) -> LogTimeUseCase:
        return LogTimeUseCase(
            ledger_service=ledger_service,
            profile_service=profile_service,
            notification_service=notification_service,
            unit_of_work=unit_of_work,
        )

    @provide(scope=Scope.REQUEST)
    def get_confirm_transaction_use_case(
        self, transaction_service: TransactionService
    ) -> ConfirmTransactionUseCase:
        return ConfirmTransactionUseCase(transaction_service=transaction_service)

    @provide(scope=Scope.REQUEST)
    def get_dispute_transaction_use_case(
        self, transaction_service: TransactionService
    ) -> DisputeTransactionUseCase:
        return DisputeTransactionUseCase(transaction_service=transaction_service)

    @provide(scope=Scope.REQUEST)
    def get_cancel_transaction_use_case(
        self, transaction_service: TransactionService
    ) -> CancelTransactionUseCase:
        return CancelTransactionUseCase(transaction_service=transaction_service)

    @provide(scope=Scope.REQUEST)
    def get_nudge_transaction_use_case(
        self,
        nudge_service: NudgeService,
        profile_service: ProfileService,
        notification_service: NotificationService,
        unit_of_work: UnitOfWork,
    ) -> NudgeTransactionUseCase:
        return NudgeTransactionUseCase(
            nudge_service=nudge_service,
            profile_service=profile_service,
            notification_service=notification_service,
            unit_of_work=unit_of_work,
        )

    @provide(scope=Scope.REQUEST)
    def get_pending_transactions_use_case(
        self, transaction_service: TransactionService
    ) -> GetPendingTransactionsUseCase:
        return GetPendingTransactionsUseCase(transaction_service=transaction_service)

    @provide(scope=Scope.REQUEST)
    def get_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> GetInvitationUseCase:
        return GetInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_accept_invitation_use_case(
        self,
        invitation_service: InvitationService,
        profile_service: ProfileService,
        unit_of_work: UnitOfWork,
    ) -> AcceptInvitationUseCase:
        return AcceptInvitationUseCase(
            invitation_service=invitation_service,
            profile_service=profile_service,
            unit_of_work=unit_of_work,
        )

    @provide(scope=Scope.REQUEST)
    def get_cancel_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> CancelInvitationUseCase:
        return CancelInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_expire_invitations_use_case(
        self, invitation_service: InvitationService, profile_service: ProfileService
    ) -> ExpireInvitationsUseCase:
        return ExpireInvitationsUseCase(
            invitation_service=invitation_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_load_feed_use_case(self, feed_service: FeedService) -> LoadFeedUseCase:
        return LoadFeedUseCase(feed_service=feed_service)

    @provide(scope=Scope.REQUEST)
    def get_current_profile_use_case(
        self, session_service: SessionService, profile_service: ProfileService
    ) -> GetCurrentProfileUseCase:
        return GetCurrentProfileUseCase(
            session_service=session_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_balance_use_case(self, balance_service: BalanceService) -> GetBalanceUseCase:
        return GetBalanceUseCase(balance_service=balance_service)

    @provide(scope=Scope.REQUEST)
    def get_stage_pending_profile_use_case(
        self, profile_service: ProfileService
    ) -> StagePendingProfileUseCase:
        return StagePendingProfileUseCase(profile_service=profile_service)

    @provide(scope=Scope.REQUEST)
    def get_confirm_account_use_case(
        self,
        session_service: SessionService,
        profile_service: ProfileService,
        log_time_use_case: LogTimeUseCase,
        unit_of_work: UnitOfWork,
    ) -> ConfirmAccountUseCase:
        return ConfirmAccountUseCase(
            session_service=session_service,
            profile_service=profile_service,
            log_time_use_case=log_time_use_case,
            unit_of_work=unit_of_work,
        )
