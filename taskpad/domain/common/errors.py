from __future__ import annotations


class DomainError(Exception):
    """Base for errors surfaced to the user as a notification."""


class ValidationError(DomainError):
    pass


class NotFoundError(DomainError):
    pass


class ConflictError(DomainError):
    pass


class NotAuthenticated(DomainError):
    pass


class RemoteUnavailable(DomainError):
    """The store handle is not initialized; nothing was sent."""


class StoreError(DomainError):
    """The store call completed but reported a failure."""
