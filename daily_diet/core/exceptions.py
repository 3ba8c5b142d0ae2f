"""Error taxonomy shared by the services and the HTTP layer.

Every error carries a suggested ``http_status`` so the exception handlers in
``daily_diet.main`` can render it without knowing the concrete type.
"""

from typing import Any, Mapping, Optional


class DailyDietError(Exception):
    """Base class for errors surfaced to the caller.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, ids)
        code: machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 400
    default_code = "error"

    def __init__(self, message: str = "Request failed", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ValidationError(DailyDietError):
    """Malformed or missing required input; the operation was not attempted."""

    http_status = 400
    default_code = "validation_error"


class MissingCredentialError(DailyDietError):
    """The operation needs a session identity and none was presented."""

    http_status = 401
    default_code = "missing_credential"


class NotOwnerError(DailyDietError):
    """The meal exists but belongs to another session."""

    http_status = 403
    default_code = "not_owner"


class NotFoundError(DailyDietError):
    http_status = 404
    default_code = "not_found"


class StoreFailureError(DailyDietError):
    """The database rejected or failed a call. Never retried."""

    http_status = 500
    default_code = "store_failure"
