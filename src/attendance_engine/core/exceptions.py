class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(ValidationError):
    """Raised when shift/department configuration is malformed.

    Detected while loading the configuration snapshot, so no record of the
    batch is classified against a broken shift.
    """


class InvalidRangeError(ValidationError):
    """Raised when a date range ends before it starts."""
