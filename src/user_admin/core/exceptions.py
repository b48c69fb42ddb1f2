class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Submitted data breaks a field rule or a uniqueness rule (e.g. duplicate email)."""


class AuthenticationError(DomainError):
    """Staff login failed."""


class AuthorizationError(DomainError):
    """The logged-in staff lacks the role required for an action."""


class NoDataFoundError(DomainError):
    """A lookup by identifier matched no row."""
