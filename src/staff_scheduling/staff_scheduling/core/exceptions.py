from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    Each subclass carries a stable ``code`` and a default message that callers
    can show to the user as-is.
    """

    code = "domain_error"
    default_message = "The operation is not allowed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"
    default_message = "Invalid input"


class AuthenticationError(DomainError):
    """Raised when no staff identity is available for the request."""

    code = "not_authenticated"
    default_message = "Please sign in to continue"


class NotFound(DomainError):
    code = "not_found"
    default_message = "The record does not exist"


class InvalidTransition(DomainError):
    code = "invalid_transition"
    default_message = "This shift cannot change to the requested status"


class NotToday(DomainError):
    code = "not_today"
    default_message = "You can only clock in or out on the day of your shift"


class AlreadyStarted(DomainError):
    code = "already_started"
    default_message = "You have already clocked in for this shift"


class NotStarted(DomainError):
    code = "not_started"
    default_message = "You have not clocked in for this shift yet"


class AlreadyEnded(DomainError):
    code = "already_ended"
    default_message = "You have already clocked out of this shift"


class AlreadyConfirmed(DomainError):
    code = "already_confirmed"
    default_message = "This shift is already confirmed"


class InvalidRange(ValidationError):
    code = "invalid_range"
    default_message = "The end date must be on or after the start date"


class NotEditable(DomainError):
    code = "not_editable"
    default_message = "Only pending requests can be changed"


class StorageUnavailable(Exception):
    """Transient persistence failure. The only error kind a caller may retry."""

    code = "storage_unavailable"
    default_message = "The schedule service is temporarily unavailable, please try again"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "forbidden"
    default_message = "You do not have permission to do this"
