class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class InvalidInputError(DomainError):
    """Raised when request data is missing or has the wrong shape."""

    status_code = 400


class ConflictError(DomainError):
    """Raised when a uniqueness rule would be violated."""

    status_code = 409


class NotFoundError(DomainError):
    """Raised when the referenced user does not exist (or there are none)."""

    # Clients already treat "not found" as a bad request.
    status_code = 400
