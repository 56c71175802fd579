"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a write violates a uniqueness rule.

    Repositories raise this for a duplicate email or a duplicate
    ``(provider, provider_user_id)`` pair so callers can re-read the row
    that won the race.
    """

    def __init__(self, resource: str, field: str):
        self.resource = resource
        self.field = field
        super().__init__(f"{resource} already exists for {field}")


class InactiveUserError(DomainError):
    """Raised when a deactivated account tries to authenticate."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} is inactive")
