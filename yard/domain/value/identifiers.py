"""Typed identifiers for ledger entities.

NewType keeps a ProfileId from being passed where a TransactionId is expected.
"""

from typing import NewType
from uuid import UUID

ProfileId = NewType("ProfileId", UUID)
TransactionId = NewType("TransactionId", UUID)
InvitationId = NewType("InvitationId", UUID)
PendingTimeLogId = NewType("PendingTimeLogId", UUID)
PendingProfileId = NewType("PendingProfileId", UUID)

# Auth provider identity (the ``sub`` claim); not generated by this service
UserId = NewType("UserId", UUID)
