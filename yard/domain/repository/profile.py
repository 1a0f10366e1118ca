"""Profile repository interfaces."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal

from yard.domain.model.profile import PendingProfile, Profile, ProfileLink
from yard.domain.value import Email, ProfileId, UserId


class ProfileRepository(ABC):
    """Repository for Profile aggregate."""

    @abstractmethod
    async def find_by_id(self, profile_id: ProfileId) -> Profile | None:
        """Find a profile by ID.

        Args:
            profile_id: The profile's unique identifier

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: UserId) -> Profile | None:
        """Find the profile belonging to an auth provider identity.

        Args:
            user_id: Auth provider user ID (token subject)

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Profile | None:
        """Find a profile by exact (normalised) email.

        Args:
            email: Normalised email address

        Returns:
            The profile if found, None otherwise

        Raises:
            StorageError: If the lookup itself fails
        """
        pass

    @abstractmethod
    async def find_by_ids(self, profile_ids: list[ProfileId]) -> list[Profile]:
        """Find several profiles at once.

        Args:
            profile_ids: Profile IDs to load

        Returns:
            Profiles found, in no particular order
        """
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update).

        Args:
            profile: The profile to save

        Returns:
            The saved profile
        """
        pass

    @abstractmethod
    async def add_links(self, profile_id: ProfileId, links: list[ProfileLink]) -> None:
        """Attach external links to a profile, skipping ones it already has.

        Args:
            profile_id: Profile to update
            links: Links to add
        """
        pass

    @abstractmethod
    async def refresh_balance(
        self, profile_id: ProfileId, updated_at: datetime
    ) -> Decimal | None:
        """Rewrite the cached balance from confirmed transactions.

        The sum and the write happen in one UPDATE under the profile row
        lock, so concurrent confirmations on one profile cannot lose an update.

        Args:
            profile_id: Profile to update
            updated_at: Timestamp of the update

        Returns:
            The stored balance, or None if the profile does not exist
        """
        pass


class PendingProfileRepository(ABC):
    """Repository for sign-up data staged before account confirmation."""

    @abstractmethod
    async def find_by_email(self, email: Email) -> PendingProfile | None:
        """Find staged sign-up data by email.

        Args:
            email: Normalised email address

        Returns:
            The pending profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, pending: PendingProfile) -> PendingProfile:
        """Stage sign-up data, replacing any earlier record for the same email.

        Args:
            pending: The pending profile to save

        Returns:
            The saved pending profile
        """
        pass

    @abstractmethod
    async def delete_by_email(self, email: Email) -> bool:
        """Remove staged sign-up data.

        Args:
            email: Normalised email address

        Returns:
            True if a record was removed
        """
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Remove staged records past their expiry.

        Args:
            now: Current time

        Returns:
            Number of records removed
        """
        pass
