"""Exception taxonomy shared by the submission pipeline and the admin API."""

from __future__ import annotations

from typing import Mapping


class MelbaError(Exception):
    """Base error carrying the HTTP status and the user-facing message."""

    status_code = 500
    default_message = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message}


class ValidationError(MelbaError):
    status_code = 400
    default_message = "Validation failed."

    def __init__(self, message: str | None = None, errors: Mapping[str, str] | None = None) -> None:
        super().__init__(message)
        self.errors = dict(errors or {})

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.errors:
            payload["errors"] = self.errors
        return payload


class DuplicateKeyError(MelbaError):
    status_code = 400
    default_message = "A record with the same unique value already exists."


class MalformedIdentityError(MelbaError):
    status_code = 400
    default_message = "Invalid ID format."


class NotFoundError(MelbaError):
    status_code = 404
    default_message = "Record not found."


class UploadError(MelbaError):
    status_code = 400
    default_message = "Upload error."


class PersistenceFault(MelbaError):
    status_code = 500
    default_message = "Server error. Please try again later."


class NotificationFault(MelbaError):
    """Raised by transports; always caught and logged by the dispatcher."""

    default_message = "Email delivery failed."


__all__ = [
    "MelbaError",
    "ValidationError",
    "DuplicateKeyError",
    "MalformedIdentityError",
    "NotFoundError",
    "UploadError",
    "PersistenceFault",
    "NotificationFault",
]
