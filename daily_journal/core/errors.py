"""Application error taxonomy.

Services raise these; the app factory turns them into JSON responses of the
form ``{"ok": False, "error": <code>, ...}``.
"""

from __future__ import annotations

from typing import Any, Optional


class JournalError(Exception):
    status_code = 500
    error_code = "unexpected_error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message or code or self.error_code)
        self.message = message
        self.code = code or self.error_code
        self.details = details

    def to_dict(self) -> dict:
        body: dict = {"ok": False, "error": self.code}
        if self.message:
            body["message"] = self.message
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationFailed(JournalError):
    status_code = 400
    error_code = "validation_error"


class AuthorizationFailed(JournalError):
    status_code = 401
    error_code = "unauthorized"


class NotFound(JournalError):
    status_code = 404
    error_code = "not_found"


class Conflict(JournalError):
    status_code = 409
    error_code = "conflict"

    def __init__(self, message: Optional[str] = None, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.field:
            body["field"] = self.field
        return body
