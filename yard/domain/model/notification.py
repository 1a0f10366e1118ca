"""Outbound notification messages."""

from typing import Any

from pydantic import Field

from yard.domain.model.common import DomainModel
from yard.domain.value import NotificationKind


class Notification(DomainModel):
    """A message for the notification function to deliver."""

    kind: NotificationKind
    recipient: str
    template_data: dict[str, Any] = Field(default_factory=dict)


class NotificationOutcome(DomainModel):
    """Delivery result. Failure here never fails the operation that sent it."""

    success: bool
    message: str = ""
