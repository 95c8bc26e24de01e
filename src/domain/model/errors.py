"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist (or must look that way to the caller)."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        super().__init__(message)


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class PreconditionError(DomainError):
    """Operation requires state the account does not have yet."""
