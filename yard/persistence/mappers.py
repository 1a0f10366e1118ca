"""Mappers between database rows and domain models.

Domain models are frozen pydantic models, so rows are mapped by hand
rather than through SQLAlchemy's ORM.
"""

from decimal import Decimal
from typing import Any, Dict
from uuid import UUID

from yard.domain.model import (
    FeedEntry,
    FeedParticipant,
    Invitation,
    PendingProfile,
    PendingTimeLog,
    Profile,
    ProfileLink,
    TimeLoggingData,
    TimeTransaction,
)
from yard.domain.value import (
    Email,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    LogMode,
    PendingProfileId,
    PendingTimeLogId,
    PendingTimeLogStatus,
    ProfileId,
    TransactionId,
    TransactionKind,
    TransactionStatus,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return _uuid(value) if value is not None else None


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model."""
    return Profile(
        id=ProfileId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        email=Email(row["email"]),
        full_name=row.get("full_name"),
        display_name=row.get("display_name"),
        bio=row.get("bio"),
        location=row.get("location"),
        time_balance_hours=Decimal(row.get("time_balance_hours") or 0),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    """Convert Profile domain model to a row dict."""
    return profile.model_dump()


def row_to_pending_profile(row: Dict[str, Any]) -> PendingProfile:
    """Convert database row to PendingProfile domain model."""
    time_logging_data = row.get("time_logging_data")
    return PendingProfile(
        id=PendingProfileId(_uuid(row["id"])),
        email=Email(row["email"]),
        full_name=row.get("full_name"),
        display_name=row.get("display_name"),
        bio=row.get("bio"),
        location=row.get("location"),
        urls=[ProfileLink.model_validate(u) for u in row.get("urls") or []],
        time_logging_data=(
            TimeLoggingData.model_validate(time_logging_data)
            if time_logging_data
            else None
        ),
        created_at=row["created_at"],
        expires_at=row["expires_at"],
    )


def pending_profile_to_dict(pending: PendingProfile) -> Dict[str, Any]:
    """Convert PendingProfile to a row dict; nested data goes to JSONB."""
    return pending.model_dump(mode="json") | {
        "id": pending.id,
        "created_at": pending.created_at,
        "expires_at": pending.expires_at,
    }


def row_to_transaction(row: Dict[str, Any]) -> TimeTransaction:
    """Convert database row to TimeTransaction domain model."""
    return TimeTransaction(
        id=TransactionId(_uuid(row["id"])),
        giver_id=ProfileId(_uuid(row["giver_id"])),
        receiver_id=ProfileId(_uuid(row["receiver_id"])),
        hours=Decimal(row["hours"]),
        description=row.get("description") or "",
        service_type=row.get("service_type") or "general",
        status=TransactionStatus(row["status"]),
        logged_by=ProfileId(_uuid(row["logged_by"])),
        confirmed_at=row.get("confirmed_at"),
        confirmed_by=_optional_uuid(row.get("confirmed_by")),
        disputed_at=row.get("disputed_at"),
        dispute_reason=row.get("dispute_reason"),
        cancelled_at=row.get("cancelled_at"),
        last_nudged_at=row.get("last_nudged_at"),
        nudge_count=row.get("nudge_count") or 0,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def transaction_to_dict(transaction: TimeTransaction) -> Dict[str, Any]:
    """Convert TimeTransaction domain model to a row dict."""
    data = transaction.model_dump()
    data["status"] = transaction.status.value
    return data


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model."""
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        inviter_id=ProfileId(_uuid(row["inviter_id"])),
        email=Email(row["email"]),
        full_name=row.get("full_name"),
        token=InvitationToken(row["token"]),
        status=InvitationStatus(row["status"]),
        expires_at=row["expires_at"],
        accepted_at=row.get("accepted_at"),
        accepted_by=_optional_uuid(row.get("accepted_by")),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to a row dict."""
    data = invitation.model_dump()
    data["status"] = invitation.status.value
    return data


def row_to_time_log(row: Dict[str, Any]) -> PendingTimeLog:
    """Convert database row to PendingTimeLog domain model."""
    return PendingTimeLog(
        id=PendingTimeLogId(_uuid(row["id"])),
        invitation_id=InvitationId(_uuid(row["invitation_id"])),
        logger_profile_id=ProfileId(_uuid(row["logger_profile_id"])),
        invitee_email=Email(row["invitee_email"]),
        invitee_name=row.get("invitee_name"),
        invitee_contact=row["invitee_contact"],
        hours=Decimal(row["hours"]),
        description=row.get("description") or "",
        service_type=row.get("service_type") or "general",
        mode=LogMode(row["mode"]),
        status=PendingTimeLogStatus(row["status"]),
        converted_transaction_id=_optional_uuid(row.get("converted_transaction_id")),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def time_log_to_dict(time_log: PendingTimeLog) -> Dict[str, Any]:
    """Convert PendingTimeLog domain model to a row dict."""
    data = time_log.model_dump()
    data["mode"] = time_log.mode.value
    data["status"] = time_log.status.value
    return data


def row_to_feed_entry(row: Dict[str, Any], kind: TransactionKind) -> FeedEntry:
    """Convert a transaction row joined with party names to a FeedEntry.

    Expects ``giver_name`` and ``receiver_name`` columns next to the
    transaction columns.
    """
    return FeedEntry(
        id=_uuid(row["id"]),
        kind=kind,
        giver=FeedParticipant(id=_uuid(row["giver_id"]), name=row["giver_name"]),
        receiver=FeedParticipant(id=_uuid(row["receiver_id"]), name=row["receiver_name"]),
        hours=Decimal(row["hours"]),
        description=row.get("description") or "",
        service_type=row.get("service_type") or "general",
        created_at=row["created_at"],
    )
