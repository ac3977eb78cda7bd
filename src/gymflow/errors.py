"""Error types raised by the scheduling and session core."""


class GymflowError(Exception):
    """Base class for errors surfaced to API and CLI callers."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


class NotFoundError(GymflowError):
    """Profile, session or routine is absent or not owned by the caller."""

    kind = "not_found"


class InvalidStateError(GymflowError):
    """Mutation attempted on a record whose state forbids it."""

    kind = "invalid_state"


class ValidationError(GymflowError, ValueError):
    """Malformed input such as bad series data or an out-of-range day."""

    kind = "validation_error"
