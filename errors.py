"""Exceptions raised by the services and converted to JSON by the REST layer."""

from __future__ import annotations


class HeraclesError(ValueError):
    """Base class; ``status_code`` is the HTTP status used at the boundary."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(HeraclesError):
    """Malformed payload. Nothing has been written when this is raised."""

    status_code = 400

    def __init__(
        self, message: str = "Invalid payload", field_errors: dict | None = None
    ) -> None:
        super().__init__(message)
        self.field_errors: dict[str, list[str]] = field_errors or {}

    @classmethod
    def for_field(cls, path: str, error: str) -> "ValidationError":
        return cls("Invalid payload", {path: [error]})


class AuthError(HeraclesError):
    status_code = 401


class AuthorizationError(HeraclesError):
    status_code = 403


class NotFoundError(HeraclesError):
    status_code = 404


class ConflictError(HeraclesError):
    status_code = 409


class InvariantViolation(HeraclesError):
    status_code = 400


def field_errors(errors: list[dict]) -> dict[str, list[str]]:
    """Flatten pydantic error dicts into ``{"items.0.itemType": [msg, ...]}``."""
    result: dict[str, list[str]] = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] == "body":
            loc = loc[1:]
        path = ".".join(loc) or "_root"
        result.setdefault(path, []).append(err.get("msg", "invalid"))
    return result
