class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigError(DomainError):
    """Raised when settings are missing or malformed."""


class StorageError(DomainError):
    """Raised when the attendance store or the evidence store fails an I/O operation."""


class DispatchError(DomainError):
    """Raised by a notification transport when a message could not be delivered."""
