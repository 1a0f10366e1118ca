"""Ledger writer domain service."""

from decimal import Decimal
from uuid import uuid4

import logfire

from yard.config import LedgerSettings
from yard.domain.error import ValidationError
from yard.domain.model.ledger import DirectLogResult, InvitedLogResult, LogTimeResult
from yard.domain.model.profile import Profile
from yard.domain.model.transaction import TimeTransaction
from yard.domain.repository import TransactionRepository
from yard.domain.value import (
    Email,
    LogMode,
    ProfileId,
    TransactionId,
    TransactionStatus,
    HOURS_STEP,
    MAX_HOURS,
    is_valid_email,
    normalize_email,
)
from yard.util.clock import Clock

from .base import Service
from .contact_resolver import ContactResolver
from .invitation_service import InvitationService


class LedgerService(Service):
    """Records time logged by a member against a counterpart.

    Known counterparts get a pending transaction straight away; unknown
    ones get an email invitation carrying the time log.
    """

    def __init__(
        self,
        contact_resolver: ContactResolver,
        transaction_repository: TransactionRepository,
        invitation_service: InvitationService,
        clock: Clock,
        ledger_settings: LedgerSettings,
    ) -> None:
        """Initialize ledger service.

        Args:
            contact_resolver: Counterpart lookup
            transaction_repository: Transaction repository
            invitation_service: Invitation lifecycle service
            clock: Time source
            ledger_settings: Ledger configuration
        """
        self.contact_resolver = contact_resolver
        self.transaction_repository = transaction_repository
        self.invitation_service = invitation_service
        self.clock = clock
        self.ledger_settings = ledger_settings

    async def log_time(
        self,
        actor: Profile,
        mode: LogMode,
        counterpart_contact: str,
        counterpart_name: str | None,
        hours: Decimal,
        description: str = "",
        service_type: str | None = None,
    ) -> LogTimeResult:
        """Log an exchange between the actor and a counterpart.

        Args:
            actor: Profile logging the time
            mode: ``helped`` if the actor gave time, ``wasHelped`` if received
            counterpart_contact: Counterpart email
            counterpart_name: Counterpart name, used for invitations
            hours: Hours exchanged, must be positive
            description: What the time was for
            service_type: Service category (defaults to the configured one)

        Returns:
            Direct result with the transaction, or invited result with the link

        Raises:
            ValidationError: Bad hours, self-logging or unusable contact
            StorageError: If the records could not be stored
        """
        service_type = service_type or self.ledger_settings.default_service_type
        description = description.strip()

        with logfire.span(
            "ledger_service.log_time",
            actor_id=str(actor.id),
            mode=mode.value,
            hours=str(hours),
        ):
            hours = self._checked_hours(hours)

            if not counterpart_contact or not counterpart_contact.strip():
                raise ValidationError("Please enter your counterpart's email address")

            resolution = await self.contact_resolver.resolve(counterpart_contact)

            if resolution.found and resolution.profile_id is not None:
                if resolution.profile_id == actor.id:
                    logfire.warn("Actor tried to log time with themself", actor_id=str(actor.id))
                    raise ValidationError("You can't log time with yourself")

                transaction = await self._record(
                    actor.id, resolution.profile_id, mode, hours, description, service_type
                )
                return DirectLogResult(
                    transaction_id=transaction.id,
                    counterpart_id=resolution.profile_id,
                    counterpart_name=resolution.name or resolution.contact,
                    counterpart_email=resolution.email or Email(resolution.contact),
                )

            email = normalize_email(counterpart_contact)
            if not is_valid_email(email):
                logfire.warn("Rejected invalid counterpart email", contact=email)
                raise ValidationError(
                    "Please enter a valid email address to invite your counterpart"
                )
            if Email(email) == actor.email:
                raise ValidationError("You can't log time with yourself")

            invitation, _ = await self.invitation_service.create_invitation(
                inviter=actor,
                invitee_email=Email(email),
                invitee_name=(counterpart_name or "").strip() or None,
                invitee_contact=counterpart_contact.strip(),
                hours=hours,
                description=description,
                mode=mode,
                service_type=service_type,
            )
            return InvitedLogResult(
                invitation_id=invitation.id,
                invitation_token=invitation.token,
                invite_url=self.invitation_service.invite_url(invitation.token),
                invitee_email=invitation.email,
                invitee_name=invitation.full_name,
            )

    @staticmethod
    def _checked_hours(hours: Decimal) -> Decimal:
        """Reject hours the ledger cannot store, returning them in hundredths."""
        if not hours.is_finite():
            logfire.warn("Rejected non-finite hours", hours=str(hours))
            raise ValidationError("Hours must be a number")
        if hours <= 0:
            logfire.warn("Rejected non-positive hours", hours=str(hours))
            raise ValidationError("Hours must be greater than zero")
        if hours > MAX_HOURS:
            logfire.warn("Rejected oversized hours", hours=str(hours))
            raise ValidationError(f"Hours can't be more than {MAX_HOURS}")
        rounded = hours.quantize(HOURS_STEP)
        if rounded != hours:
            logfire.warn("Rejected hours finer than hundredths", hours=str(hours))
            raise ValidationError("Hours can have at most two decimal places")
        return rounded

    async def _record(
        self,
        actor_id: ProfileId,
        counterpart_id: ProfileId,
        mode: LogMode,
        hours: Decimal,
        description: str,
        service_type: str,
    ) -> TimeTransaction:
        now = self.clock.now()
        giver_id, receiver_id = mode.assign(actor_id, counterpart_id)
        transaction = TimeTransaction(
            id=TransactionId(uuid4()),
            giver_id=giver_id,
            receiver_id=receiver_id,
            hours=hours,
            description=description,
            service_type=service_type,
            status=TransactionStatus.PENDING,
            logged_by=actor_id,
            created_at=now,
            updated_at=now,
        )
        saved = await self.transaction_repository.create(transaction)
        logfire.info(
            "Time transaction recorded",
            transaction_id=str(saved.id),
            giver_id=str(giver_id),
            receiver_id=str(receiver_id),
        )
        return saved
