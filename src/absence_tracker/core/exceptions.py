class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ImportPayloadError(DomainError):
    """Raised when an import payload cannot be parsed; no state was changed."""
