"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the conversation and CLI layers can catch them uniformly and turn them
into short user-facing messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PriceChangedError(ValidationError):
    """The catalog changed between the order summary and its confirmation."""

    def __init__(self, shown, current) -> None:
        super().__init__(f"Order total changed from {shown} to {current}")
        self.shown = shown
        self.current = current


class PersistenceError(DomainException):
    """A store could not be read or written."""


class UnauthorizedError(DomainException):
    """The caller is not allowed to run an operator command."""
