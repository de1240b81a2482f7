class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidPeriod(ValidationError):
    """Raised when a reporting period cannot be resolved to a date range."""


class FetchFailed(DomainError):
    """Raised when the record store cannot be read."""


class PartialClassification(DomainError):
    """Raised when a record lacks a field needed to group it."""
