class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationFailed(DomainError):
    """Raised when a PIN or administrative password matches nobody."""


class AuthorizationError(DomainError):
    """Raised when an actor lacks permission for an action."""


class NotFound(DomainError):
    """Raised when a referenced employee or record does not exist."""


class InvalidPinRotation(ValidationError):
    """Raised when a new PIN is malformed, unchanged or already taken."""


class NotPending(DomainError):
    """Raised when approving/rejecting a record that already left pending_approval.

    The caller holds a stale view and must refresh before retrying.
    """


class MarkInProgress(DomainError):
    """Raised when a kiosk mark is submitted while another one is still in flight."""


class InvalidKioskTransition(DomainError):
    """Raised when a kiosk event is not accepted in the current state."""


class PersistenceUnavailable(DomainError):
    """Raised when the document store cannot be read or written."""
