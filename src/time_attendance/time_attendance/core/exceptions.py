class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class DuplicateSubmission(DomainError):
    """Raised when the period already has a timesheet for the employee."""


class InvalidTransition(DomainError):
    """Raised when approve/reject targets a timesheet that is not submitted."""


class SelfApproval(DomainError):
    """Raised when a manager tries to decide on their own timesheet."""


class MissingReason(DomainError):
    """Raised when a rejection carries no reason."""
