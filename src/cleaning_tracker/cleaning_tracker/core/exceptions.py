class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced document does not exist."""


class StoreError(Exception):
    """Raised when the document store fails (driver, network, bad payload)."""


class NotificationError(Exception):
    """Raised by the email client when a delivery is rejected."""
