# app/exceptions.py
from typing import Any, Dict, Optional


class AppError(Exception):
    """
    Base exception for the application.

    Carries the HTTP status the error handler should answer with.
    """

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "message": self.message,
            "status": self.status_code,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


class FieldErrors(AppError):
    """Errors answered in the per-field `{"errors": {...}}` shape."""

    field = "common"

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or {self.field: message}

    def to_body(self) -> Dict[str, Any]:
        return {"errors": {field: {"msg": msg} for field, msg in self.errors.items()}}


class ValidationError(FieldErrors):
    """Client input failed one or more field rules."""

    status_code = 400
    code = "VALIDATION_ERROR"


class UploadError(FieldErrors):
    """Uploaded file was rejected or could not be stored."""

    status_code = 400
    code = "UPLOAD_ERROR"
    field = "avatar"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


class StoreError(AppError):
    """Document store failure: connection loss, constraint violation..."""

    status_code = 500
    code = "STORE_ERROR"
