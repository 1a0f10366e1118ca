"""Counterpart lookup."""

import logfire

from yard.domain.error import StorageError
from yard.domain.model.ledger import ContactResolution
from yard.domain.repository import ProfileRepository
from yard.domain.value import (
    ContactResolutionStatus,
    Email,
    is_valid_email,
    normalize_email,
)

from .base import Service


class ContactResolver(Service):
    """Maps a free-text contact to an existing profile.

    Only exact (normalised) email matches count; names are never matched.
    """

    def __init__(self, profile_repository: ProfileRepository) -> None:
        self.profile_repository = profile_repository

    async def resolve(self, contact: str) -> ContactResolution:
        """Resolve a contact to a profile.

        A failed lookup is reported as ``lookup_failed``; callers treat it
        like ``not_found`` and fall back to inviting by email.

        Args:
            contact: Email address as typed by the user

        Returns:
            Resolution outcome, never raises
        """
        normalized = normalize_email(contact)
        with logfire.span("contact_resolver.resolve", contact=normalized):
            if not is_valid_email(normalized):
                logfire.info("Contact is not an email address", contact=normalized)
                return ContactResolution(
                    status=ContactResolutionStatus.NOT_FOUND, contact=normalized
                )

            try:
                profile = await self.profile_repository.find_by_email(Email(normalized))
            except StorageError as e:
                logfire.error(
                    "Contact lookup failed, treating as unknown",
                    contact=normalized,
                    error=e.cause or e.message,
                )
                return ContactResolution(
                    status=ContactResolutionStatus.LOOKUP_FAILED, contact=normalized
                )

            if profile is None:
                logfire.info("Contact has no profile", contact=normalized)
                return ContactResolution(
                    status=ContactResolutionStatus.NOT_FOUND, contact=normalized
                )

            logfire.info(
                "Contact resolved", contact=normalized, profile_id=str(profile.id)
            )
            return ContactResolution(
                status=ContactResolutionStatus.FOUND,
                contact=normalized,
                profile_id=profile.id,
                name=profile.name,
                email=profile.email,
            )
