class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is malformed or out of range."""


class ConflictError(DomainError):
    """Raised when a uniqueness or state-transition rule would be broken."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist or is inactive."""


class AuthError(DomainError):
    """Raised when the caller identity is missing, invalid or not allowed."""


class AuthenticationError(AuthError):
    """Raised when login credentials are invalid."""


class AuthorizationError(AuthError):
    """Raised when an employee lacks permission for an action."""


class PersistenceError(DomainError):
    """Raised when the underlying store fails.

    The message is safe to show to callers; driver detail stays in the
    chained exception.
    """
