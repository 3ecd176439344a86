# ticketing/core/errors.py
"""Error taxonomy for the ticket plugin."""

from typing import Any, Sequence

from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthError(AppError):
    """Missing or invalid bearer token."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED)


class ValidationError(AppError):
    """Request body failed validation; only the first failure is reported."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)
        self.field = field

    @classmethod
    def from_errors(cls, errors: Sequence[dict[str, Any]]) -> "ValidationError":
        if not errors:
            return cls("body is invalid")
        error = errors[0]
        loc = [str(part) for part in error.get("loc", ())]
        # loc is ("body", <field>, ...) for body errors
        source, path = (loc[0], loc[1:]) if loc else ("body", [])
        kind = error.get("type", "")

        if not path or kind == "json_invalid":
            return cls(f"{source} should be object")

        field = path[0]
        if kind == "missing":
            parent = "/".join([source, *path[:-1]])
            return cls(f"{parent} should have required property '{path[-1]}'", field)

        pointer = "/".join([source, *path])
        if kind == "string_too_short":
            limit = (error.get("ctx") or {}).get("min_length", 1)
            return cls(f"{pointer} should NOT be shorter than {limit} characters", field)
        if kind == "string_type":
            return cls(f"{pointer} should be string", field)
        return cls(f"{pointer} {error.get('msg', 'is invalid')}", field)


class StorageError(AppError):
    """The document store was unreachable or rejected an operation."""

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


class ConfigurationError(Exception):
    """Raised while composing the plugin, before any request is served."""


__all__ = [
    "AppError",
    "AuthError",
    "ValidationError",
    "StorageError",
    "ConfigurationError",
]
