"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user acts on a delegation they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to manage {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class AccessResolutionError(DomainError):
    """Raised when delegated access could not be determined.

    Distinct from an empty result: callers must deny access on this error.
    """

    def __init__(self, user_id: str, cause: Exception | None = None):
        self.user_id = user_id
        self.cause = cause
        super().__init__(f"Delegated access could not be resolved for user {user_id}")
