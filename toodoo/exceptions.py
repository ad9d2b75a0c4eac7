"""Exception types for TooDoo.

Service and repository code raises these; the API layer maps them to HTTP
responses.
"""


class ToDooError(Exception):
    """Base exception for all TooDoo errors."""
    pass


class ValidationError(ToDooError, ValueError):
    """A required field is missing or blank."""

    def __init__(self, field: str, message: str = None):
        self.field = field
        super().__init__(message or f"{field} must not be empty")


class NotFoundError(ToDooError):
    """Entity with the given ID doesn't exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class RegistrationError(ToDooError):
    """The alarm facility rejected a reminder request.

    Non-fatal: the state change that triggered the registration stands.
    """

    def __init__(self, identifier: str, reason: str):
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Failed to register reminder {identifier}: {reason}")


class AlreadySetUpError(ToDooError):
    """Default data was requested but categories already exist."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Already set up ({count} categories exist)")
