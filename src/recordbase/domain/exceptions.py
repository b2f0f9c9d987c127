"""Exceptions raised by resource stores and the migration engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single field validation error.

    Attributes:
        field: The offending field name.
        message: Human-readable error message.
        code: Machine-readable error code.
        allowed: Allowed values, for enum violations.
    """

    field: str
    message: str
    code: str
    allowed: tuple[str, ...] | None = None


class RecordBaseError(Exception):
    """Base class for all RecordBase errors."""
    pass


class UnknownResourceError(RecordBaseError):
    """Raised when a collection is not declared in the schema."""

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"Unknown resource: {resource}")


class ValidationError(RecordBaseError):
    """Raised when record data does not satisfy the resource schema."""

    def __init__(self, details: list[FieldError]):
        self.details = list(details)
        super().__init__("; ".join(self._messages()))

    def _messages(self) -> list[str]:
        missing = [d.field for d in self.details if d.code == "required_missing"]
        messages = []
        if missing:
            messages.append(f"Required field(s) missing: {', '.join(missing)}")
        messages.extend(d.message for d in self.details if d.code != "required_missing")
        return messages

    @property
    def fields(self) -> list[str]:
        """Names of the offending fields, in the order they were reported."""
        return [d.field for d in self.details]


class NotFoundError(RecordBaseError):
    """Raised when a record to update does not exist."""

    def __init__(self, resource: str, record_id: str):
        self.resource = resource
        self.record_id = record_id
        super().__init__(f"Record not found: {record_id}")


class MigrationConfigurationError(RecordBaseError):
    """Raised when a migration is started with an unusable source or target."""
    pass
