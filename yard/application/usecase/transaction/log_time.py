"""Log time use case."""

from decimal import Decimal
from uuid import UUID

import logfire
from pydantic import BaseModel

from yard.domain.model.ledger import DirectLogResult, LogTimeResult
from yard.domain.model.notification import NotificationOutcome
from yard.domain.model.profile import Profile
from yard.domain.repository import UnitOfWork
from yard.domain.service import LedgerService, NotificationService, ProfileService
from yard.domain.value import LogMode, ProfileId


class LogTimeRequest(BaseModel):
    """Log time request."""

    actor_id: str  # Profile ID of the authenticated member
    mode: LogMode
    counterpart_contact: str
    counterpart_name: str | None = None
    hours: Decimal
    description: str = ""
    service_type: str | None = None


class LogTimeResponse(BaseModel):
    """Log time response.

    ``result.invite_url`` is always present for invitations so the member
    can share the link by hand when the email does not go out.
    """

    result: LogTimeResult
    notification_sent: bool
    notification_message: str = ""


class LogTimeUseCase:
    """Use case for logging time with a member or a prospective member."""

    def __init__(
        self,
        ledger_service: LedgerService,
        profile_service: ProfileService,
        notification_service: NotificationService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize log time use case.

        Args:
            ledger_service: Ledger writer
            profile_service: Profile domain service
            notification_service: Notification dispatch
            unit_of_work: Storage transaction boundary
        """
        self.ledger_service = ledger_service
        self.profile_service = profile_service
        self.notification_service = notification_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: LogTimeRequest) -> LogTimeResponse:
        """Execute log time flow.

        Steps:
        1. Load the acting profile
        2. Record the transaction or the invitation
        3. Commit
        4. Notify the counterpart

        Args:
            request: Log time request

        Returns:
            What was recorded and whether the notification went out

        Raises:
            NotFoundError: If the acting profile does not exist
            ValidationError: If the input is rejected
            StorageError: If the records could not be stored
        """
        with logfire.span("log_time.execute", actor_id=request.actor_id):
            actor = await self.profile_service.get_by_id(ProfileId(UUID(request.actor_id)))
            result = await self.record(actor, request)
            return await self.complete(actor, request, result)

    async def record(self, actor: Profile, request: LogTimeRequest) -> LogTimeResult:
        """Write the transaction or invitation without committing."""
        return await self.ledger_service.log_time(
            actor=actor,
            mode=request.mode,
            counterpart_contact=request.counterpart_contact,
            counterpart_name=request.counterpart_name,
            hours=request.hours,
            description=request.description,
            service_type=request.service_type,
        )

    async def complete(
        self, actor: Profile, request: LogTimeRequest, result: LogTimeResult
    ) -> LogTimeResponse:
        """Commit what `record` wrote, then notify the counterpart."""
        # Records must be durable before anyone is told about them
        await self.unit_of_work.commit()

        outcome = await self._notify(actor, request, result)
        return LogTimeResponse(
            result=result,
            notification_sent=outcome.success,
            notification_message=outcome.message,
        )

    async def _notify(
        self, actor: Profile, request: LogTimeRequest, result: LogTimeResult
    ) -> NotificationOutcome:
        if isinstance(result, DirectLogResult):
            return await self.notification_service.send_time_logged(
                recipient_email=str(result.counterpart_email),
                recipient_name=result.counterpart_name,
                logger_name=actor.name,
                hours=request.hours,
                mode=request.mode,
                description=request.description,
            )

        return await self.notification_service.send_invitation(
            invitee_email=str(result.invitee_email),
            invitee_name=result.invitee_name,
            inviter_name=actor.name,
            hours=request.hours,
            mode=request.mode,
            invitation_token=str(result.invitation_token),
            invite_url=result.invite_url,
        )
