"""Profile onboarding domain service."""

from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

import logfire

from yard.config import LedgerSettings
from yard.domain.error import NotFoundError
from yard.domain.model.profile import PendingProfile, Profile, ProfileLink, TimeLoggingData
from yard.domain.repository import PendingProfileRepository, ProfileRepository
from yard.domain.value import Email, PendingProfileId, ProfileId, UserId
from yard.util.clock import Clock

from .base import Service


class ProfileService(Service):
    """Stages sign-up data and turns it into a profile once the account exists."""

    def __init__(
        self,
        profile_repository: ProfileRepository,
        pending_profile_repository: PendingProfileRepository,
        clock: Clock,
        ledger_settings: LedgerSettings,
    ) -> None:
        self.profile_repository = profile_repository
        self.pending_profile_repository = pending_profile_repository
        self.clock = clock
        self.ledger_settings = ledger_settings

    async def get_by_id(self, profile_id: ProfileId) -> Profile:
        profile = await self.profile_repository.find_by_id(profile_id)
        if profile is None:
            raise NotFoundError("Profile", str(profile_id))
        return profile

    async def get_by_user_id(self, user_id: UserId) -> Profile | None:
        """Profile for an authenticated identity, if it has been created."""
        with logfire.span("profile_service.get_by_user_id", user_id=str(user_id)):
            return await self.profile_repository.find_by_user_id(user_id)

    async def stage_pending_profile(
        self,
        email: Email,
        full_name: str | None = None,
        display_name: str | None = None,
        bio: str | None = None,
        location: str | None = None,
        urls: list[ProfileLink] | None = None,
        time_logging_data: TimeLoggingData | None = None,
    ) -> PendingProfile:
        """Hold sign-up details until the account is confirmed.

        A second submission for the same email replaces the first.

        Args:
            email: Sign-up email
            full_name: Full name
            display_name: Display name
            bio: Short bio
            location: Location
            urls: Profile links
            time_logging_data: Exchange to log once the account exists

        Returns:
            The staged record
        """
        with logfire.span("profile_service.stage_pending_profile", email=str(email)):
            now = self.clock.now()
            pending = PendingProfile(
                id=PendingProfileId(uuid4()),
                email=email,
                full_name=full_name,
                display_name=display_name,
                bio=bio,
                location=location,
                urls=urls or [],
                time_logging_data=time_logging_data,
                created_at=now,
                expires_at=now + timedelta(days=self.ledger_settings.pending_profile_expiry_days),
            )
            saved = await self.pending_profile_repository.save(pending)
            logfire.info(
                "Pending profile staged",
                email=str(email),
                has_time_log=time_logging_data is not None,
            )
            return saved

    async def materialize_profile(
        self, user_id: UserId, email: Email
    ) -> tuple[Profile, TimeLoggingData | None, bool]:
        """Create the profile for a confirmed account.

        Uses staged sign-up data when a non-expired record exists for the
        email, and removes it afterwards.

        Args:
            user_id: Auth provider identity
            email: Confirmed account email

        Returns:
            ``(profile, time_logging_data, created)``; time logging data is
            only returned when the profile was created by this call
        """
        with logfire.span(
            "profile_service.materialize_profile", user_id=str(user_id), email=str(email)
        ):
            existing = await self.profile_repository.find_by_user_id(user_id)
            if existing is not None:
                logfire.info("Profile already exists", profile_id=str(existing.id))
                return existing, None, False

            now = self.clock.now()
            pending = await self.pending_profile_repository.find_by_email(email)
            if pending is not None and pending.is_expired(now):
                logfire.info("Ignoring expired pending profile", email=str(email))
                await self.pending_profile_repository.delete_by_email(email)
                pending = None

            profile = Profile(
                id=ProfileId(uuid4()),
                user_id=user_id,
                email=email,
                full_name=pending.full_name if pending else None,
                display_name=pending.display_name if pending else None,
                bio=pending.bio if pending else None,
                location=pending.location if pending else None,
                time_balance_hours=Decimal("0"),
                created_at=now,
                updated_at=now,
            )
            saved = await self.profile_repository.save(profile)

            if pending is not None:
                if pending.urls:
                    await self.profile_repository.add_links(saved.id, pending.urls)
                await self.pending_profile_repository.delete_by_email(email)

            logfire.info(
                "Profile created",
                profile_id=str(saved.id),
                from_pending=pending is not None,
            )
            return saved, pending.time_logging_data if pending else None, True

    async def purge_expired_pending(self) -> int:
        """Drop staged sign-ups past their expiry."""
        with logfire.span("profile_service.purge_expired_pending"):
            count = await self.pending_profile_repository.delete_expired(self.clock.now())
            logfire.info("Expired pending profiles removed", count=count)
            return count
