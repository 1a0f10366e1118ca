"""Confirm account use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from yard.application.usecase.transaction.log_time import (
    LogTimeRequest,
    LogTimeResponse,
    LogTimeUseCase,
)
from yard.domain.error import DomainError, ValidationError
from yard.domain.repository import UnitOfWork
from yard.domain.service import ProfileService, SessionService
from yard.domain.value import Email, UserId


class ConfirmAccountRequest(BaseModel):
    """Confirm account request."""

    token: str  # Session JWT of the freshly confirmed account


class ConfirmAccountResponse(BaseModel):
    """Confirm account response."""

    profile_id: str
    created: bool
    time_logged: LogTimeResponse | None = None
    time_log_error: str | None = None


class ConfirmAccountUseCase:
    """Use case run when the auth provider confirms a new account.

    Creates the profile from staged sign-up data, then logs any exchange
    captured at sign-up. A failure while logging that exchange is reported
    but never undoes the account.
    """

    def __init__(
        self,
        session_service: SessionService,
        profile_service: ProfileService,
        log_time_use_case: LogTimeUseCase,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize confirm account use case.

        Args:
            session_service: Session token verification
            profile_service: Profile domain service
            log_time_use_case: Log time use case, reused for the staged exchange
            unit_of_work: Storage transaction boundary
        """
        self.session_service = session_service
        self.profile_service = profile_service
        self.log_time_use_case = log_time_use_case
        self.unit_of_work = unit_of_work

    async def execute(self, request: ConfirmAccountRequest) -> ConfirmAccountResponse:
        """Materialise the profile and log staged time.

        Raises:
            JWTError: If the token is invalid or expired
            ValidationError: If the token carries no usable email
        """
        payload = self.session_service.verify(request.token)
        if not payload.email:
            raise ValidationError("Account has no email address")

        with logfire.span("confirm_account.execute", user_id=payload.user_id):
            profile, time_logging_data, created = (
                await self.profile_service.materialize_profile(
                    UserId(UUID(payload.user_id)), Email(payload.email)
                )
            )
            await self.unit_of_work.commit()

            response = ConfirmAccountResponse(profile_id=str(profile.id), created=created)
            if time_logging_data is None:
                return response

            log_request = LogTimeRequest(
                actor_id=str(profile.id),
                mode=time_logging_data.mode,
                counterpart_contact=time_logging_data.contact,
                counterpart_name=time_logging_data.name,
                hours=time_logging_data.hours,
                description=time_logging_data.description,
            )
            try:
                async with self.unit_of_work.savepoint():
                    result = await self.log_time_use_case.record(profile, log_request)
            except DomainError as e:
                logfire.warn(
                    "Staged time log could not be recorded",
                    profile_id=str(profile.id),
                    error=e.message,
                )
                return response.model_copy(update={"time_log_error": e.message})

            logged = await self.log_time_use_case.complete(profile, log_request, result)
            logfire.info(
                "Staged time log recorded",
                profile_id=str(profile.id),
                kind=logged.result.kind,
            )
            return response.model_copy(update={"time_logged": logged})
