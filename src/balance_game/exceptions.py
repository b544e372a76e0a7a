"""Error taxonomy for the question pipeline.

Every error carries the HTTP status and machine-readable ``error`` code
the API reports for it. Only transient provider failures are recovered
locally (by the retry executor); everything else propagates to the caller
as a structured payload.
"""

from enum import Enum
from typing import Any

from fastapi import status


class GenerationFailureReason(str, Enum):
    """Why a generation attempt produced no candidates."""

    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"
    HTTP_ERROR = "HTTP_ERROR"
    TRUNCATED = "TRUNCATED"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    PARSE_FAILED = "PARSE_FAILED"


class BalanceGameError(Exception):
    """Base exception for the question service."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "INTERNAL_ERROR"

    def __init__(self, message: str, **details: Any) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def to_payload(self) -> dict[str, Any]:
        """Render the error as the JSON body returned to API clients."""
        return {"error": self.message, "code": self.error, **self.details}


class ConfigError(BalanceGameError):
    """A required secret or setting is missing. Fatal, never retried."""

    error = "CONFIG_ERROR"


class ValidationInputError(BalanceGameError):
    """A request is missing required fields. Rejected before generation."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "INVALID_REQUEST"


class GenerationError(BalanceGameError):
    """The LLM provider did not yield a usable candidate list."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error = "GENERATION_FAILED"

    def __init__(self, message: str, reason: GenerationFailureReason, **details: Any) -> None:
        self.reason = reason
        super().__init__(message, reason=reason.value, **details)


class ProviderTransientError(GenerationError):
    """The provider stayed rate-limited or unavailable for every attempt."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message, GenerationFailureReason.RETRY_EXHAUSTED, **details)


class ProviderFatalError(GenerationError):
    """Non-transient provider failure: error status, truncation, bad envelope."""


class ParseError(GenerationError):
    """The model output was not a JSON array."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message, GenerationFailureReason.PARSE_FAILED, **details)


class ValidationShortfallError(BalanceGameError):
    """Fewer than the required number of pairs survived validation and backfill."""

    error = "VALIDATION_SHORTFALL"

    def __init__(self, attained: int, required: int) -> None:
        self.attained = attained
        self.required = required
        super().__init__(
            f"Only {attained} of {required} questions remained after validation",
            attained=attained,
            required=required,
        )


class CacheUnavailableError(BalanceGameError):
    """The question store could not be reached."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error = "CACHE_UNAVAILABLE"


class QuestionsNotReadyError(BalanceGameError):
    """No questions stored yet and on-demand generation is disabled.

    Clients answer this by switching to their offline question bank.
    """

    status_code = status.HTTP_404_NOT_FOUND
    error = "NOT_GENERATED"
