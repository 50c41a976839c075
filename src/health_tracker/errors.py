"""Error types raised by services and adapters."""


class HealthTrackerError(Exception):
    """Base class for health tracker failures."""


class EntityNotFoundError(HealthTrackerError):
    """A write targeted a row that does not exist."""

    def __init__(self, entity: str, key: object) -> None:
        super().__init__(f"{entity} not found: {key}")
        self.entity = entity
        self.key = key


class InvalidInputError(HealthTrackerError):
    """Input rejected before it reached the store."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class BackendError(HealthTrackerError):
    """The store was unreachable or rejected the request."""
