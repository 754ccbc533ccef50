"""Store-level exceptions, mapped to HTTP responses by the API layer."""

from typing import Any

from pydantic import ValidationError as PydanticValidationError


class CRMError(Exception):
    """Base class for errors raised by the stores."""

    message = "Request failed"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(CRMError):
    """Malformed or out-of-range input.

    `errors` is a list of {"field": ..., "message": ...} dicts, one per
    violated field, with camelCase dotted field paths.
    """

    message = "Invalid data"

    def __init__(self, message: str | None = None, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, detail: str, message: str | None = None) -> "ValidationError":
        return cls(message, [{"field": field, "message": detail}])

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError, message: str | None = None) -> "ValidationError":
        return cls(message, format_errors(exc.errors()))


class NotFoundError(CRMError):
    """The target record is missing or soft-deleted."""

    def __init__(self, entity: str = "Record"):
        self.entity = entity
        super().__init__(f"{entity} not found")


class ConflictError(CRMError):
    """A unique value is already taken."""

    message = "Conflict"


class InternalError(CRMError):
    """Unexpected backing-store failure, raised when a commit fails."""

    message = "Internal server error"


def format_errors(raw_errors) -> list[dict[str, Any]]:
    """Flatten pydantic error dicts into field/message pairs."""
    errors = []
    for err in raw_errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        loc = [str(part) for part in loc]
        errors.append({"field": ".".join(loc) or None, "message": err.get("msg", "Invalid value")})
    return errors
