"""Domain layer errors.

Every error carries a machine-readable ``kind`` that the interface layer
renders next to the human message.
"""


class DomainError(Exception):
    """Base domain error."""

    kind: str = "domain_error"


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str, message: str | None = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(message or f"{resource} not found: {identifier}")


class ContentDeletedError(NotFoundError):
    """Raised when attempting to modify soft-deleted content."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            resource, identifier, f"{resource} {identifier} has been deleted"
        )


class InvalidArgumentError(DomainError):
    """Raised for malformed input such as an unknown vote choice or bad length."""

    kind = "invalid_argument"


class PermissionDeniedError(DomainError):
    """Raised when a user attempts to modify content they may not touch."""

    kind = "permission_denied"

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        super().__init__(
            f"User {user_id} is not allowed to {action} {resource} {resource_id}"
        )


class ConflictError(DomainError):
    """Raised when a write collides with existing state (duplicate URL, report...)."""

    kind = "conflict"


class TransientStoreError(DomainError):
    """Raised when the store times out or loses its connection."""

    kind = "transient_store_error"
