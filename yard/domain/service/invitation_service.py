"""Invitation lifecycle domain service."""

import secrets
from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from yard.config import APISettings, LedgerSettings
from yard.domain.error import (
    AlreadyUsedError,
    ExpiredError,
    ForbiddenError,
    NotFoundError,
)
from yard.domain.model.invitation import (
    AcceptInvitationResult,
    Invitation,
    InvitationDetails,
    PendingTimeLog,
    TimeLogSummary,
)
from yard.domain.model.profile import Profile
from yard.domain.model.transaction import TimeTransaction
from yard.domain.repository import (
    InvitationRepository,
    ProfileRepository,
    TransactionRepository,
    UnitOfWork,
)
from yard.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    LogMode,
    PendingTimeLogId,
    PendingTimeLogStatus,
    ProfileId,
    TransactionId,
    TransactionStatus,
)
from yard.util.clock import Clock
from yard.util.observability import redact_token

from .base import Service

DEFAULT_INVITER_NAME = "A Yard member"


class InvitationService(Service):
    """Creates invitations, validates tokens and converts pending time logs.

    Business rules:
    - every invitation carries exactly one pending time log
    - an invitation past ``expires_at`` is expired whatever its stored status
    - a pending time log becomes a transaction at most once
    """

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        transaction_repository: TransactionRepository,
        profile_repository: ProfileRepository,
        unit_of_work: UnitOfWork,
        clock: Clock,
        ledger_settings: LedgerSettings,
        api_settings: APISettings,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            transaction_repository: Transaction repository
            profile_repository: Profile repository
            unit_of_work: Storage transaction boundary
            clock: Time source
            ledger_settings: Expiry configuration
            api_settings: Frontend URL used for invite links
        """
        self.invitation_repository = invitation_repository
        self.transaction_repository = transaction_repository
        self.profile_repository = profile_repository
        self.unit_of_work = unit_of_work
        self.clock = clock
        self.ledger_settings = ledger_settings
        self.api_settings = api_settings

    def invite_url(self, token: InvitationToken) -> str:
        return self.api_settings.invite_url(str(token))

    async def create_invitation(
        self,
        inviter: Profile,
        invitee_email: Email,
        invitee_name: str | None,
        invitee_contact: str,
        hours: Decimal,
        description: str,
        mode: LogMode,
        service_type: str,
    ) -> tuple[Invitation, PendingTimeLog]:
        """Invite a non-member and attach the logged time to the invitation.

        Args:
            inviter: Profile logging the time
            invitee_email: Normalised email of the invitee
            invitee_name: Name as entered by the inviter
            invitee_contact: Contact as entered by the inviter
            hours: Hours logged
            description: What the time was for
            mode: Direction from the inviter's side
            service_type: Service category

        Returns:
            The invitation and its pending time log

        Raises:
            StorageError: If the records could not be stored
        """
        with logfire.span(
            "invitation_service.create_invitation",
            inviter_id=str(inviter.id),
            invitee_email=str(invitee_email),
        ):
            now = self.clock.now()
            invitation = Invitation(
                id=InvitationId(uuid4()),
                inviter_id=inviter.id,
                email=invitee_email,
                full_name=invitee_name,
                token=InvitationToken(secrets.token_hex(32)),
                status=InvitationStatus.PENDING,
                expires_at=now + timedelta(days=self.ledger_settings.invitation_expiry_days),
                created_at=now,
                updated_at=now,
            )
            time_log = PendingTimeLog(
                id=PendingTimeLogId(uuid4()),
                invitation_id=invitation.id,
                logger_profile_id=inviter.id,
                invitee_email=invitee_email,
                invitee_name=invitee_name,
                invitee_contact=invitee_contact,
                hours=hours,
                description=description,
                service_type=service_type,
                mode=mode,
                status=PendingTimeLogStatus.PENDING,
                created_at=now,
                updated_at=now,
            )

            invitation, time_log = await self.invitation_repository.create_with_time_log(
                invitation, time_log
            )
            logfire.info(
                "Invitation created",
                invitation_id=str(invitation.id),
                inviter_id=str(inviter.id),
                token=invitation.token.redacted(),
                expires_at=invitation.expires_at.isoformat(),
            )
            return invitation, time_log

    async def _find_by_token(self, token: str) -> Invitation:
        try:
            parsed = InvitationToken(token)
        except PydanticValidationError:
            logfire.warn("Malformed invitation token", token=redact_token(token))
            raise NotFoundError("Invitation", redact_token(token))

        invitation = await self.invitation_repository.find_by_token(parsed)
        if invitation is None:
            logfire.warn("Invitation not found", token=parsed.redacted())
            raise NotFoundError("Invitation", parsed.redacted())
        return invitation

    def _ensure_usable(self, invitation: Invitation) -> None:
        # Expiry wins over stored status for anything not yet accepted
        if invitation.effective_status(self.clock.now()) == InvitationStatus.EXPIRED:
            logfire.warn(
                "Invitation expired",
                invitation_id=str(invitation.id),
                stored_status=invitation.status.value,
            )
            raise ExpiredError("Invitation", invitation.expires_at)

        if invitation.status != InvitationStatus.PENDING:
            logfire.warn(
                "Invitation already used",
                invitation_id=str(invitation.id),
                status=invitation.status.value,
            )
            raise AlreadyUsedError("Invitation", invitation.status.value)

    async def get_by_token(self, token: str) -> InvitationDetails:
        """Look up a usable invitation for the invite landing page.

        Args:
            token: Token from the invite link

        Returns:
            Invitation details with the time log summary

        Raises:
            NotFoundError: No invitation has this token
            ExpiredError: The invitation is past its expiry
            AlreadyUsedError: The invitation was accepted or cancelled
        """
        with logfire.span("invitation_service.get_by_token", token=redact_token(token)):
            invitation = await self._find_by_token(token)
            self._ensure_usable(invitation)

            inviter = await self.profile_repository.find_by_id(invitation.inviter_id)
            time_log = await self.invitation_repository.find_time_log(invitation.id)

            return InvitationDetails(
                invitation_id=invitation.id,
                email=invitation.email,
                full_name=invitation.full_name,
                inviter_name=inviter.name if inviter else DEFAULT_INVITER_NAME,
                expires_at=invitation.expires_at,
                time_log=(
                    TimeLogSummary(
                        hours=time_log.hours,
                        description=time_log.description,
                        mode=time_log.mode,
                    )
                    if time_log
                    else None
                ),
            )

    async def accept(self, token: str, profile: Profile) -> AcceptInvitationResult:
        """Accept an invitation and convert its time log into a transaction.

        Accepting again with the same profile returns the original outcome
        without creating anything.

        Args:
            token: Token from the invite link
            profile: The invitee's newly created profile

        Returns:
            Acceptance outcome

        Raises:
            NotFoundError: No invitation has this token
            ExpiredError: The invitation is past its expiry
            AlreadyUsedError: The invitation was used by someone else or cancelled
            ForbiddenError: The inviter tried to accept their own invitation
        """
        with logfire.span(
            "invitation_service.accept",
            token=redact_token(token),
            profile_id=str(profile.id),
        ):
            invitation = await self._find_by_token(token)

            if (
                invitation.status == InvitationStatus.ACCEPTED
                and invitation.accepted_by == profile.id
            ):
                time_log = await self.invitation_repository.find_time_log(invitation.id)
                logfire.info(
                    "Invitation already accepted by this profile",
                    invitation_id=str(invitation.id),
                )
                return AcceptInvitationResult(
                    invitation_id=invitation.id,
                    transaction_created=False,
                    transaction_id=time_log.converted_transaction_id if time_log else None,
                    already_accepted=True,
                )

            self._ensure_usable(invitation)

            if invitation.inviter_id == profile.id:
                logfire.warn(
                    "Inviter tried to accept own invitation",
                    invitation_id=str(invitation.id),
                )
                raise ForbiddenError(
                    "accept", "invitation", str(invitation.id), "it is your own invitation"
                )

            time_log = await self.invitation_repository.find_time_log(invitation.id)
            now = self.clock.now()
            transaction_id: TransactionId | None = None

            async with self.unit_of_work.savepoint():
                claimed = await self.invitation_repository.mark_accepted(
                    invitation.id, profile.id, now
                )
                if not claimed:
                    logfire.warn(
                        "Invitation accepted concurrently", invitation_id=str(invitation.id)
                    )
                    raise AlreadyUsedError("Invitation", InvitationStatus.ACCEPTED.value)

                if time_log and time_log.status == PendingTimeLogStatus.PENDING:
                    transaction_id = await self._convert(time_log, profile.id)

            logfire.info(
                "Invitation accepted",
                invitation_id=str(invitation.id),
                profile_id=str(profile.id),
                transaction_created=transaction_id is not None,
            )
            return AcceptInvitationResult(
                invitation_id=invitation.id,
                transaction_created=transaction_id is not None,
                transaction_id=transaction_id,
            )

    async def _convert(self, time_log: PendingTimeLog, invitee_id: ProfileId) -> TransactionId:
        now = self.clock.now()
        giver_id, receiver_id = time_log.mode.assign(time_log.logger_profile_id, invitee_id)
        transaction = TimeTransaction(
            id=TransactionId(uuid4()),
            giver_id=giver_id,
            receiver_id=receiver_id,
            hours=time_log.hours,
            description=time_log.description,
            service_type=time_log.service_type,
            status=TransactionStatus.PENDING,
            logged_by=time_log.logger_profile_id,
            created_at=now,
            updated_at=now,
        )
        await self.transaction_repository.create(transaction)

        converted = await self.invitation_repository.mark_time_log_converted(
            time_log.id, transaction.id, now
        )
        if not converted:
            raise AlreadyUsedError("Time log", PendingTimeLogStatus.CONVERTED.value)

        logfire.info(
            "Pending time log converted",
            time_log_id=str(time_log.id),
            transaction_id=str(transaction.id),
        )
        return transaction.id

    async def cancel(self, invitation_id: InvitationId, actor_id: ProfileId) -> None:
        """Withdraw a pending invitation and its time log.

        Args:
            invitation_id: Invitation to cancel
            actor_id: Profile asking; must be the inviter

        Raises:
            NotFoundError: Unknown invitation
            ForbiddenError: Actor is not the inviter
            ExpiredError: The invitation already expired
            AlreadyUsedError: The invitation was accepted or cancelled
        """
        with logfire.span(
            "invitation_service.cancel",
            invitation_id=str(invitation_id),
            actor_id=str(actor_id),
        ):
            invitation = await self.invitation_repository.find_by_id(invitation_id)
            if invitation is None:
                raise NotFoundError("Invitation", str(invitation_id))

            if invitation.inviter_id != actor_id:
                logfire.warn(
                    "Non-inviter tried to cancel invitation",
                    invitation_id=str(invitation_id),
                    actor_id=str(actor_id),
                )
                raise ForbiddenError(
                    "cancel", "invitation", str(invitation_id), "only the inviter can cancel it"
                )

            self._ensure_usable(invitation)

            cancelled = await self.invitation_repository.cancel(invitation_id, self.clock.now())
            if not cancelled:
                raise AlreadyUsedError("Invitation", InvitationStatus.ACCEPTED.value)

            logfire.info("Invitation cancelled", invitation_id=str(invitation_id))

    async def expire_stale(self) -> int:
        """Mark pending invitations past expiry, and their logs, as expired.

        Returns:
            Number of invitations expired
        """
        with logfire.span("invitation_service.expire_stale"):
            count = await self.invitation_repository.expire_stale(self.clock.now())
            logfire.info("Stale invitations expired", count=count)
            return count
