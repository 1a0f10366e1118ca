"""Domain layer errors.

One exception class per failure kind the ledger can report. Every error
carries a stable ``code`` and a user-facing ``message`` so the interface layer
can render a specific explanation instead of a generic failure.
"""

from datetime import datetime


class DomainError(Exception):
    """Base domain error."""

    code: str = "domain_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Bad input: malformed email, non-positive hours, empty dispute reason."""

    code = "validation_error"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    code = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when the acting profile may not perform the operation."""

    code = "forbidden"

    def __init__(self, action: str, resource: str, resource_id: str, reason: str):
        self.action = action
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"Cannot {action} {resource} {resource_id}: {reason}")


class InvalidStateError(DomainError):
    """Raised when a transition is attempted from an ineligible status."""

    code = "invalid_state"

    def __init__(self, resource: str, resource_id: str, current_status: str):
        self.resource = resource
        self.resource_id = resource_id
        self.current_status = current_status
        super().__init__(f"{resource} {resource_id} is already {current_status}")


class ExpiredError(DomainError):
    """Raised when an invitation is past its expiry."""

    code = "expired"

    def __init__(self, resource: str, expired_at: datetime):
        self.resource = resource
        self.expired_at = expired_at
        super().__init__(f"{resource} expired on {expired_at.date().isoformat()}")


class AlreadyUsedError(DomainError):
    """Raised when an invitation is no longer pending."""

    code = "already_used"

    def __init__(self, resource: str, status: str):
        self.resource = resource
        self.status = status
        super().__init__(f"{resource} has already been {status}")


class RateLimitedError(DomainError):
    """Raised when an action is attempted before its cooldown has passed."""

    code = "rate_limited"

    def __init__(self, action: str, retry_after: datetime):
        self.action = action
        self.retry_after = retry_after
        super().__init__(
            f"Please wait before you {action} again "
            f"(available after {retry_after.isoformat(timespec='minutes')})"
        )


class StorageError(DomainError):
    """Raised when the underlying data store fails or times out."""

    code = "storage_error"

    def __init__(self, operation: str, cause: str | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__("Something went wrong saving your changes, please try again")
