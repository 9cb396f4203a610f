"""Error types shared across the planner."""

from uuid import UUID


class UnauthenticatedError(PermissionError):
    """Raised when an operation runs without an authenticated owner."""

    def __init__(self, message: str = "User not authenticated") -> None:
        super().__init__(message)


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing."""


class RecordNotFoundError(LookupError):
    """Raised when a record does not exist for the current owner."""

    def __init__(self, entity: str, record_id: UUID) -> None:
        super().__init__(f"{entity} {record_id} not found")
        self.entity = entity
        self.record_id = record_id


class ModelCallError(RuntimeError):
    """Raised when the language model request itself fails."""

    def __init__(self, code: str | None, message: str) -> None:
        super().__init__(message)
        self.code = code
