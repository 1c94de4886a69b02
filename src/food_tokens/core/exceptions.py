class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(DomainError):
    """Raised when an insert collides with an existing unique key."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class RepositoryError(DomainError):
    """Base for failures talking to the data store."""


class TransportError(RepositoryError):
    """The data store could not be reached."""


class QueryError(RepositoryError):
    """The data store rejected a query."""
