from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence


class NormalizationFailure(ValueError):
    """The completion text could not be turned into a comparison result."""


class ServiceError(Exception):
    """Base for every failure the comparison pipeline reports to its caller.

    `message` is safe to show to users; `detail` keeps the upstream diagnostic
    for logs and is never serialized.
    """

    kind = "internal"
    code = "internal_error"
    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None, *, detail: Optional[str] = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message}


class ValidationError(ServiceError):
    kind = "validation"
    code = "validation_error"
    status_code = 400
    default_message = "Invalid comparison request"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[Sequence[str]] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message, detail=detail)
        self.details: List[str] = list(details or [])

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        if self.details:
            payload["details"] = list(self.details)
        return payload


class AiUnavailableError(ServiceError):
    kind = "ai_unavailable"
    code = "ai_service_error"
    status_code = 502
    default_message = "AI service is currently unavailable. Please try again."


class NormalizationError(ServiceError):
    kind = "normalization_failure"
    code = "normalization_error"
    status_code = 502
    default_message = "Failed to process AI response. Please try again."


class PersistenceFailure(ServiceError):
    kind = "persistence_failure"
    code = "database_error"
    status_code = 500
    default_message = "Failed to store comparison"


class InternalError(ServiceError):
    pass
